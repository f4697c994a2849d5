"""t2tctl: normalize task titles and keep pseudo due dates in step."""

__version__ = "0.1.0"
