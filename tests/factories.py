"""Shared builders for content tests."""

import json
from pathlib import Path
from typing import Any


def pointer_boxes_props() -> dict[str, Any]:
    """Props for a PointerDiagram drawn as boxes and arrows."""
    return {
        "title": "Pointer to pointer",
        "boxes": [
            {"label": "pp", "address": "0x100", "value": "0x200", "type": "pointer"},
            {"label": "p", "address": "0x200", "value": "0x300", "type": "pointer"},
            {"label": "x", "address": "0x300", "value": "42", "type": "data"},
        ],
        "arrows": [{"from": "pp", "to": "p"}, {"from": "p", "to": "x"}],
    }


def sample_blocks() -> list[dict[str, Any]]:
    """One valid block of every kind, as authored JSON."""
    return [
        {"type": "prose", "markdown": "## Pointers\n\nA pointer stores an address."},
        {
            "type": "code",
            "language": "c",
            "code": "int x = 42;\nint *p = &x;\n",
            "filename": "main.c",
            "highlightLines": [2],
        },
        {"type": "output", "content": "42\n", "prompt": "$ ./a.out"},
        {
            "type": "note",
            "variant": "warning",
            "title": "NULL",
            "markdown": "Dereferencing NULL is undefined behaviour.",
        },
        {
            "type": "codeDiff",
            "before": "int *p;",
            "after": "int *p = NULL;",
            "language": "c",
            "description": "Always initialise pointers",
        },
        {
            "type": "diagram",
            "component": "PointerDiagram",
            "props": pointer_boxes_props(),
            "caption": "pp points to p, p points to x",
        },
        {
            "type": "quiz",
            "question": "What does `*p` read?",
            "options": ["The address of p", "The value of x", "Nothing"],
            "correctIndex": 1,
            "explanation": "p holds the address of x.",
        },
        {
            "type": "exercise",
            "title": "Swap",
            "description": "Write `swap(int *a, int *b)`.",
            "hints": ["Use a temporary variable"],
            "solution": "void swap(int *a, int *b) { int t = *a; *a = *b; *b = t; }",
            "solutionLanguage": "c",
        },
    ]


def chapter_data(chapter_id: str = "pointers-intro", **overrides: Any) -> dict[str, Any]:
    """Authored JSON for a valid chapter."""
    data: dict[str, Any] = {
        "id": chapter_id,
        "title": "Introduction to pointers",
        "description": "Addresses, dereferencing, NULL",
        "blocks": sample_blocks(),
    }
    data.update(overrides)
    return data


def toc_data() -> dict[str, Any]:
    """A two-section table of contents."""
    return {
        "sections": [
            {
                "id": "language",
                "title": "The C language",
                "description": "From the first program to C23",
                "icon": "📖",
                "directory": "section-1-language",
                "chapters": [
                    {"id": "pointers-intro", "title": "Pointers", "description": "Addresses"},
                    {"id": "arrays", "title": "Arrays", "description": "Contiguous storage"},
                ],
            },
            {
                "id": "projects",
                "title": "Projects",
                "description": "Practice",
                "chapters": [
                    {"id": "calculator", "title": "Calculator", "description": "Parsing"},
                ],
            },
        ]
    }


def write_json(path: Path, data: Any) -> Path:
    """Write JSON to a path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path
