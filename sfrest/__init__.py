"""Client library for the Salesforce REST API."""

__version__ = "1.0.0"
