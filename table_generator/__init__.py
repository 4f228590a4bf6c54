"""Generate C# classes from SQL Server tables, views and stored procedures."""

__version__ = "0.1.0"
