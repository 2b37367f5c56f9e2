"""Bindable configuration properties."""

from flyaop.config.properties import AppProperties, ServerProperties, UsersProperties

__all__ = ["AppProperties", "ServerProperties", "UsersProperties"]
