"""Convert HTML into Atlassian Document Format (ADF) JSON, as a library or the html2adf command."""

__version__ = "0.1.10"