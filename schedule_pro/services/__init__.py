"""Clients for third-party providers"""
