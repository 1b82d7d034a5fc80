"""Typed record models generated from declared key sets."""

from .model import UNSET, Model, ModelSchema, define_model

__all__ = ["UNSET", "Model", "ModelSchema", "define_model"]
