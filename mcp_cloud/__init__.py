"""MCP Cloud API: template catalog and Kubernetes resource management backend."""

__version__ = "0.1.0"
