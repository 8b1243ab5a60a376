"""Tests for symsmt."""

from unittest import TestCase, main

__all__ = ["TestCase", "main"]
