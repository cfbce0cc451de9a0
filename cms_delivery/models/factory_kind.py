# cms_delivery/models/factory_kind.py
"""Kinds of content-access factories kept by the factory registry."""

from enum import Enum


class FactoryKind(str, Enum):
    PAGE = "page"
    COMPONENT_PRESENTATION = "component_presentation"
    COMPONENT = "component"
    BINARY = "binary"
