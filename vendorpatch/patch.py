#!/usr/bin/env python3

import re


class DiffPathRewriter:
    """Rewrites file paths in git diff headers to be relative to a package root.

    Only header lines are touched; hunk bodies pass through unchanged even when
    their content happens to mention the package path. Paths git wraps in
    double quotes keep their quotes.
    """

    def __init__(self, location: str):
        self.location = location.strip("/")
        prefix = re.escape(self.location + "/")
        self.git_header = re.compile(rf'^diff --git ("?)a/{prefix}(.*) ("?)b/{prefix}(.*)$')
        self.file_marker = re.compile(rf'^(---|\+\+\+) ("?)([ab])/{prefix}(.*)$')
        self.extended_header = re.compile(
            rf'^(rename from|rename to|copy from|copy to) ("?){prefix}(.*)$'
        )
        self.binary_marker = re.compile(
            rf'^Binary files ("?)a/{prefix}(.*) and ("?)b/{prefix}(.*) differ$'
        )

    def rewrite_line(self, line: str) -> str:
        match = self.binary_marker.match(line)
        if match:
            old_quote, old, new_quote, new = match.groups()
            return f"Binary files {old_quote}a/{old} and {new_quote}b/{new} differ"
        match = self.git_header.match(line)
        if match:
            old_quote, old, new_quote, new = match.groups()
            return f"diff --git {old_quote}a/{old} {new_quote}b/{new}"
        match = self.file_marker.match(line)
        if match:
            marker, quote, side, path = match.groups()
            return f"{marker} {quote}{side}/{path}"
        match = self.extended_header.match(line)
        if match:
            keyword, quote, path = match.groups()
            return f"{keyword} {quote}{path}"
        return line

    def rewrite(self, diff_text: str) -> str:
        """Strip the package location from every file entry of ``diff_text``."""
        result = []
        in_header = False
        for line in diff_text.split("\n"):
            ending = "\r" if line.endswith("\r") else ""
            body = line[: len(line) - len(ending)]
            if body.startswith("diff --git "):
                in_header = True
            elif body.startswith("@@"):
                in_header = False

            if in_header:
                body = self.rewrite_line(body)
            result.append(body + ending)
        return "\n".join(result)


def rewrite_patch_paths(diff_text: str, location: str, project_relative: bool = False) -> str:
    """Convenience function: vendor-relative rewrite unless ``project_relative``."""
    if project_relative:
        return diff_text
    return DiffPathRewriter(location).rewrite(diff_text)
