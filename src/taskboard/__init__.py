"""Taskboard package.

Feature modules (tasks, deadlines) each carry a model, a repository protocol
with its MySQL implementation, a service and a thin Flask controller.
"""
