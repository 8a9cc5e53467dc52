"""
Briefmark test configuration.

Shared reference fixtures. Every render is pure, so no setup or teardown
is needed beyond building inputs.
"""

import pytest


@pytest.fixture
def acme_references():
    return [{"id": "e1", "title": "Acme Corp"}]


@pytest.fixture
def mixed_references():
    return [
        {"id": "e1", "title": "Acme Corp", "kind": "entity"},
        {"id": "e2", "title": "Ann Lee", "kind": "entity"},
        {"id": "n1", "title": "Q3 Plan", "kind": "note"},
        {"id": "n2", "title": "Old Notes", "kind": "note", "inactive": True},
    ]
