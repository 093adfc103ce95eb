#!/usr/bin/env python3

from vendorpatch.patch import DiffPathRewriter, rewrite_patch_paths

LOCATION = "web/modules/contrib/webform"

MULTI_FILE_DIFF = """\
diff --git a/web/modules/contrib/webform/src/Form.php b/web/modules/contrib/webform/src/Form.php
index 3b18e51..a9c4f2d 100644
--- a/web/modules/contrib/webform/src/Form.php
+++ b/web/modules/contrib/webform/src/Form.php
@@ -1,3 +1,3 @@
 <?php
-// see a/web/modules/contrib/webform/README
+// see b/web/modules/contrib/webform/README
 class Form {}
diff --git a/web/modules/contrib/webform/webform.info.yml b/web/modules/contrib/webform/webform.info.yml
index 1111111..2222222 100644
--- a/web/modules/contrib/webform/webform.info.yml
+++ b/web/modules/contrib/webform/webform.info.yml
@@ -1 +1 @@
--- a/web/modules/contrib/webform/old
+++ b/web/modules/contrib/webform/new
"""


class TestDiffPathRewriter:
    def test_strips_prefix_from_every_file_entry(self):
        result = DiffPathRewriter(LOCATION).rewrite(MULTI_FILE_DIFF)
        lines = result.splitlines()

        assert lines[0] == "diff --git a/src/Form.php b/src/Form.php"
        assert lines[2] == "--- a/src/Form.php"
        assert lines[3] == "+++ b/src/Form.php"
        assert lines[9] == "diff --git a/webform.info.yml b/webform.info.yml"
        assert lines[11] == "--- a/webform.info.yml"
        assert lines[12] == "+++ b/webform.info.yml"

    def test_body_lines_are_byte_identical(self):
        result = DiffPathRewriter(LOCATION).rewrite(MULTI_FILE_DIFF)
        original = MULTI_FILE_DIFF.splitlines()
        rewritten = result.splitlines()

        assert len(original) == len(rewritten)
        for index in (1, 4, 5, 6, 7, 8, 10, 13, 14, 15):
            assert rewritten[index] == original[index]
        # Removed/added lines that look like file markers stay as they were
        assert rewritten[14] == "--- a/web/modules/contrib/webform/old"
        assert rewritten[15] == "+++ b/web/modules/contrib/webform/new"

    def test_trailing_slash_in_location(self):
        result = DiffPathRewriter(LOCATION + "/").rewrite(MULTI_FILE_DIFF)
        assert result.splitlines()[0] == "diff --git a/src/Form.php b/src/Form.php"

    def test_new_file_keeps_dev_null(self):
        diff = (
            "diff --git a/vendor/acme/widget/new.php b/vendor/acme/widget/new.php\n"
            "new file mode 100644\n"
            "--- /dev/null\n"
            "+++ b/vendor/acme/widget/new.php\n"
            "@@ -0,0 +1 @@\n"
            "+<?php\n"
        )
        lines = DiffPathRewriter("vendor/acme/widget").rewrite(diff).splitlines()
        assert lines[0] == "diff --git a/new.php b/new.php"
        assert lines[2] == "--- /dev/null"
        assert lines[3] == "+++ b/new.php"

    def test_rename_and_binary_headers(self):
        diff = (
            "diff --git a/vendor/acme/widget/a.txt b/vendor/acme/widget/b.txt\n"
            "similarity index 100%\n"
            "rename from vendor/acme/widget/a.txt\n"
            "rename to vendor/acme/widget/b.txt\n"
            "diff --git a/vendor/acme/widget/logo.png b/vendor/acme/widget/logo.png\n"
            "index 1234567..89abcde 100644\n"
            "Binary files a/vendor/acme/widget/logo.png and b/vendor/acme/widget/logo.png differ\n"
        )
        lines = DiffPathRewriter("vendor/acme/widget").rewrite(diff).splitlines()
        assert lines[2] == "rename from a.txt"
        assert lines[3] == "rename to b.txt"
        assert lines[6] == "Binary files a/logo.png and b/logo.png differ"

    def test_quoted_paths(self):
        diff = (
            'diff --git "a/vendor/acme/widget/src/Caf\\303\\251.php" '
            '"b/vendor/acme/widget/src/Caf\\303\\251.php"\n'
            "index 1234567..89abcde 100644\n"
            '--- "a/vendor/acme/widget/src/Caf\\303\\251.php"\n'
            '+++ "b/vendor/acme/widget/src/Caf\\303\\251.php"\n'
            "@@ -1 +1 @@\n"
            "-a\n"
            "+b\n"
        )
        lines = DiffPathRewriter("vendor/acme/widget").rewrite(diff).splitlines()
        assert lines[0] == 'diff --git "a/src/Caf\\303\\251.php" "b/src/Caf\\303\\251.php"'
        assert lines[2] == '--- "a/src/Caf\\303\\251.php"'
        assert lines[3] == '+++ "b/src/Caf\\303\\251.php"'

    def test_quoted_rename(self):
        diff = (
            'diff --git "a/vendor/acme/widget/tab\\there" b/vendor/acme/widget/plain\n'
            'rename from "vendor/acme/widget/tab\\there"\n'
            "rename to vendor/acme/widget/plain\n"
        )
        lines = DiffPathRewriter("vendor/acme/widget").rewrite(diff).splitlines()
        assert lines == [
            'diff --git "a/tab\\there" b/plain',
            'rename from "tab\\there"',
            "rename to plain",
        ]

    def test_other_package_paths_untouched(self):
        diff = "diff --git a/vendor/acme/widgets/x b/vendor/acme/widgets/x\n"
        assert DiffPathRewriter("vendor/acme/widget").rewrite(diff) == diff

    def test_preserves_line_endings(self):
        diff = MULTI_FILE_DIFF.replace("\n", "\r\n")
        result = DiffPathRewriter(LOCATION).rewrite(diff)
        assert result.count("\r\n") == diff.count("\r\n")
        assert result.startswith("diff --git a/src/Form.php b/src/Form.php\r\n")

    def test_empty_diff(self):
        assert DiffPathRewriter(LOCATION).rewrite("") == ""


def test_project_relative_mode_is_untouched():
    assert rewrite_patch_paths(MULTI_FILE_DIFF, LOCATION, project_relative=True) == MULTI_FILE_DIFF


def test_vendor_relative_is_default():
    result = rewrite_patch_paths(MULTI_FILE_DIFF, LOCATION)
    assert "a/web/modules/contrib/webform/src" not in result.splitlines()[0]
