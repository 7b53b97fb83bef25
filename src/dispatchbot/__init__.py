"""Discord bot whose events are routed through a declarative dispatcher."""

__version__ = "0.1.0"
