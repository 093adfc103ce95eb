#!/usr/bin/env python3

import io
import json
import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest
from rich.console import Console as RichConsole

from vendorpatch.console import Console


WIDGET_SOURCE = "<?php\n\nclass Widget\n{\n    public function size()\n    {\n        return 1;\n    }\n}\n"


def git(root: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=root, capture_output=True, text=True, check=True
    )
    return result.stdout


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=4) + "\n")


def init_project(root: Path, composer: dict | None = None) -> Path:
    """Git repository with a committed composer.json and an ignored vendor dir."""
    git(root, "init", "-q")
    git(root, "config", "user.email", "dev@example.com")
    git(root, "config", "user.name", "Dev")
    git(root, "config", "commit.gpgsign", "false")

    write_json(
        root / "composer.json",
        composer or {"name": "acme/site", "require": {"acme/widget": "^1.0"}},
    )
    (root / ".gitignore").write_text("vendor/\n")

    widget = root / "vendor" / "acme" / "widget"
    (widget / "src").mkdir(parents=True)
    (widget / "src" / "Widget.php").write_text(WIDGET_SOURCE)
    (widget / "README.md").write_text("# Widget\n")

    git(root, "add", "composer.json", ".gitignore")
    git(root, "commit", "-q", "-m", "Initial commit")
    return root


@pytest.fixture
def project():
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    with tempfile.TemporaryDirectory() as temp_dir:
        yield init_project(Path(temp_dir).resolve())


@pytest.fixture
def quiet_console():
    return Console(RichConsole(file=io.StringIO(), width=200))


class ScriptedPrompter:
    """Answers prompts from a script; ``edit`` runs while the user would be editing."""

    def __init__(self, confirm: bool = True, answers: list[str] | None = None, edit=None):
        self.confirm = confirm
        self.answers = list(answers or [])
        self.edit = edit
        self.questions: list[str] = []
        self.confirmations = 0

    def confirm_changes(self) -> bool:
        self.confirmations += 1
        if self.edit is not None:
            self.edit()
        return self.confirm

    def ask(self, question: str) -> str:
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else ""
