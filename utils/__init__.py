"""
utils package
-------------

Contains utility modules used throughout the validation service.

Includes the constants loader, logger, spreadsheet loading and export, JSON recovery
from collaborator responses, and the collaborator HTTP helpers.
"""
