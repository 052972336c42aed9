"""
Services Module

This module contains the backend services for the MCP Cloud API.

Key Submodules:
- kubernetes: Credential bootstrap, resource operations facade, connectivity probe
- templates: Template catalog persistence
- template_instances: Template instance lifecycle (placeholder)

Usage:
    from mcp_cloud.services.kubernetes import ResourceOperations, ConnectivityMonitor
    from mcp_cloud.services.templates import TemplateService
"""
