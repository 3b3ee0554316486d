"""Test helper modules for the guidepack test suite.

- catalog: write catalog directories (documents.yml, profiles.yml, docs/*.md)
"""
from __future__ import annotations
