""" Invoke tasks. """
import os
import sys
import io
from invoke.tasks import task

if isinstance(sys.stdout, io.TextIOWrapper):
    sys.stdout.reconfigure(encoding='utf-8')


@task
def install(c):
    c.run('pip install -e ".[test]"')


@task
def serve(c, host="127.0.0.1", port=8001, reload=True):
    flag = " --reload" if reload else ""
    c.run(f"uvicorn main:app --host {host} --port {port}{flag}", env={"PYTHONUTF8": "1"})


@task
def test(c, k=None):
    """Run the test suite; ``-k`` narrows it to matching tests."""
    selector = f' -k "{k}"' if k else ""
    c.run(f"pytest{selector}", pty=os.name != 'nt')


@task
def clean(c):
    """
    Cross-platform clean task to remove all __pycache__ folders and .pyc files.
    """
    if os.name == 'nt':  # Windows
        c.run("for /R %f in (*.pyc) do del /F /Q \"%f\"", warn=True)
        c.run('for /d /r %d in (__pycache__) do @if exist "%d" rmdir /s /q "%d"', warn=True)
        c.run('if exist .pytest_cache rmdir /s /q .pytest_cache', warn=True)
    else:  # Unix/Linux/macOS
        c.run("find . -type f -name '*.pyc' -delete", warn=True)
        c.run("find . -type d -name '__pycache__' -exec rm -r {} +", warn=True)
        c.run("rm -rf .pytest_cache", warn=True)
