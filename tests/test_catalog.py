"""
Tests for the example catalog.
"""

import pytest

from creative_studio.catalog import EXAMPLE_PROMPTS, examples_for, get_example
from creative_studio.models import ProjectType


def test_catalog_has_both_project_types():
    assert len(EXAMPLE_PROMPTS) == 4
    assert len(examples_for(ProjectType.GAME)) == 2
    assert len(examples_for(ProjectType.WEBSITE)) == 2
    assert examples_for() == list(EXAMPLE_PROMPTS)


def test_get_example_is_case_insensitive():
    example = get_example("  memory card game ")
    assert example.title == "Memory Card Game"
    assert example.project_type == ProjectType.GAME


def test_get_unknown_example():
    with pytest.raises(ValueError):
        get_example("Tetris")


def test_examples_are_immutable():
    with pytest.raises(Exception):
        EXAMPLE_PROMPTS[0].prompt = "changed"
