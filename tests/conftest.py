# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample resource rows shaped like the `resources` table
# - Helpers for building mocked Supabase query chains
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest

from core.models.resource import Resource

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"


def make_resource_row(**overrides) -> dict:
    """A `resources` row with sensible defaults."""
    row = {
        "id": "res-1",
        "title": "Complete Data Structures and Algorithms Notes",
        "description": "Comprehensive notes covering all DSA topics",
        "category": "notes",
        "subject": "Computer Science",
        "semester": "3",
        "year": "2024",
        "branch": "CSE",
        "price": 299,
        "file_url": "https://test-project.supabase.co/storage/v1/object/public/notes_files/u1/1700000000000.pdf",
        "preview_url": None,
        "uploader_id": OTHER_USER_ID,
        "approved": True,
        "downloads": 10,
        "rating": 4.5,
        "review_count": 2,
        "created_at": "2024-01-15T00:00:00+00:00",
        "updated_at": "2024-01-15T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def mock_query_chain(data=None) -> MagicMock:
    """
    A MagicMock that mimics a PostgREST query builder.

    Every builder method returns the same mock, so arbitrary chains like
    .table().select().eq().order().execute() end with `.data == data`.
    """
    query = MagicMock()
    for method in ("table", "select", "eq", "gte", "lte", "order", "range", "limit", "single"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data)
    return query


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def resource_row():
    """A single approved, paid resource row."""
    return make_resource_row()


@pytest.fixture
def sample_resources():
    """Six resources mirroring the demo catalog."""
    rows = [
        make_resource_row(id="1", title="Complete Data Structures and Algorithms Notes",
                          description="Comprehensive notes covering all DSA topics with examples",
                          category="notes", subject="Computer Science", semester="3",
                          year="2024", price=299, downloads=1250, rating=4.8,
                          created_at="2024-01-15T00:00:00+00:00"),
        make_resource_row(id="2", title="Mathematics Syllabus - Engineering",
                          description="Updated syllabus for Engineering Mathematics",
                          category="syllabus", subject="Mathematics", semester="2",
                          year="2024", price=0, downloads=890, rating=4.5,
                          created_at="2024-02-10T00:00:00+00:00"),
        make_resource_row(id="3", title="Physics Previous Year Papers 2019-2023",
                          description="Collection of previous year question papers with solutions",
                          category="papers", subject="Physics", semester="1",
                          year="2023", price=199, downloads=567, rating=4.7,
                          created_at="2024-03-05T00:00:00+00:00"),
        make_resource_row(id="4", title="Web Development Complete Guide",
                          description="Full stack web development notes with React",
                          category="notes", subject="Computer Science", semester="5",
                          year="2024", price=499, downloads=2100, rating=4.9,
                          created_at="2024-01-20T00:00:00+00:00"),
        make_resource_row(id="5", title="Chemistry Lab Manual",
                          description="Practical chemistry lab experiments",
                          category="notes", subject="Chemistry", semester="2",
                          year="2024", price=150, downloads=445, rating=4.3,
                          created_at="2024-02-28T00:00:00+00:00"),
        make_resource_row(id="6", title="Machine Learning Fundamentals",
                          description="Introduction to ML concepts and algorithms",
                          category="notes", subject="Computer Science", semester="7",
                          year="2024", price=399, downloads=789, rating=4.6,
                          created_at="2024-03-15T00:00:00+00:00"),
    ]
    return [Resource.model_validate(row) for row in rows]
