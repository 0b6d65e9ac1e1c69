"""
Shared pytest fixtures for the todor test suite.

This module provides:
- Sample source files in several languages
- Sample config files (TOML, YAML, JSON)
- Pre-configured TodoR instances
- A helper for writing files into tmp_path

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- sample_* : Fixtures that provide sample content strings
- todor_* : Fixtures that provide configured TodoR instances
"""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from todor import TodoR, TodoRBuilder


# =============================================================================
# Sample Source Fixtures
# =============================================================================

@pytest.fixture
def sample_rust_code() -> str:
    """
    Rust source with TODOs in line and block comments.

    Contains:
    - TODO on line 2 (line comment)
    - a plain comment on line 3
    - FIXME with explicit user on line 4
    - TODO in a block comment before code on line 6
    """
    return textwrap.dedent("""\
        fn main() {
            // TODO: item
            // regular comment
            // fixme(alice): handle errors
            let x = 1;
            /* TODO: block item */ run(x);
        }
    """)


@pytest.fixture
def sample_python_code() -> str:
    """
    Python source with TODOs in hash comments and a docstring.

    Contains:
    - TODO in a one-line docstring on line 2
    - TODO in a hash comment on line 4
    """
    return textwrap.dedent('''\
        def run():
            """TODO: docstring comment"""
            x = 1
            # TODO: item
            return x
    ''')


@pytest.fixture
def sample_five_lines() -> str:
    """Five-line Rust file with TODOs on lines 2, 3 and 5 and no final newline."""
    return "code.run()\n// TODO: one\n// TODO: two\nother.stuff()\n// TODO: three"


# =============================================================================
# Sample Config Fixtures
# =============================================================================

@pytest.fixture
def sample_toml_config() -> str:
    """TOML config replacing Rust comments with hash comments."""
    return textwrap.dedent("""\
        tags = ["foo", "item"]
        ignore = ["target/*"]

        [[comments]]
        ext = "rs"
        types = [{ single = "#" }]
    """)


@pytest.fixture
def sample_yaml_config() -> str:
    """YAML config equivalent to sample_toml_config."""
    return textwrap.dedent("""\
        tags:
          - foo
          - item
        ignore:
          - target/*
        comments:
          - ext: rs
            types:
              - single: "#"
    """)


@pytest.fixture
def sample_json_config() -> str:
    """JSON config equivalent to sample_toml_config."""
    return textwrap.dedent("""\
        {
            "tags": ["foo", "item"],
            "ignore": ["target/*"],
            "comments": [
                {"ext": "rs", "types": [{"single": "#"}]}
            ]
        }
    """)


# =============================================================================
# File Helpers
# =============================================================================

@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Return a helper writing ``content`` to ``tmp_path / name``.

    Content is written as bytes so line endings are kept exactly.
    """
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def tmp_rust_file(write_file, sample_rust_code: str) -> Path:
    return write_file("main.rs", sample_rust_code)


@pytest.fixture
def tmp_python_file(write_file, sample_python_code: str) -> Path:
    return write_file("run.py", sample_python_code)


# =============================================================================
# TodoR Fixtures
# =============================================================================

@pytest.fixture
def todor_default() -> TodoR:
    """TodoR with built-in defaults: tags TODO and FIXME."""
    return TodoR()


@pytest.fixture
def todor_todo_only() -> TodoR:
    """TodoR searching only for TODO."""
    return TodoR(TodoRBuilder().add_override_tags(["todo"]).build())
