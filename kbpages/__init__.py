"""kbpages - query construction and paging over a SharePoint knowledge-base list."""

__version__ = "0.1.0"
