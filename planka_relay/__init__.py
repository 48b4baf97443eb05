"""Planka Relay - kanban webhook to chat notification relay"""
__version__ = "0.1.0"
