"""
Tests for line classification and body extraction.
"""

from __future__ import annotations

import pytest

from cpp_include_merger.pipeline.scanner import (
    BodyBuilder,
    LineKind,
    classify_line,
    local_include_target,
    scan_source,
    strip_directives,
)


class TestClassifyLine:
    """Tests for classify_line."""

    @pytest.mark.parametrize(
        "line",
        ["#include <vector>", "  #include <bits/stdc++.h>  ", "#include<cstdio>", "# include <map>"],
    )
    def test_standard_include(self, line):
        assert classify_line(line) is LineKind.STANDARD_INCLUDE

    @pytest.mark.parametrize("line", ['#include "../lib/util.h"', '\t#include "dsu.hpp"', '#include"a.h"'])
    def test_local_include(self, line):
        assert classify_line(line) is LineKind.LOCAL_INCLUDE

    def test_using_requires_trailing_space(self):
        assert classify_line("using namespace std;") is LineKind.USING
        assert classify_line("    using ll = long long;") is LineKind.USING
        assert classify_line("usingFoo();") is LineKind.BODY

    def test_macro_include_is_body(self):
        """Includes that are neither quoted nor angle-bracketed are not directives here"""
        assert classify_line("#include HEADER_NAME") is LineKind.BODY

    def test_body_lines(self):
        assert classify_line("") is LineKind.BODY
        assert classify_line("int main() {}") is LineKind.BODY
        assert classify_line("#pragma once") is LineKind.BODY
        assert classify_line("// #include <vector> is mentioned in a comment") is LineKind.BODY

    def test_local_include_target(self):
        assert local_include_target('  #include "../lib/graph/dsu.h"') == "../lib/graph/dsu.h"
        assert local_include_target("#include <vector>") is None


class TestBodyBuilder:
    """Tests for the blank-line retention rule."""

    def test_leading_blank_lines_dropped(self):
        body = BodyBuilder()
        for line in ["", "   ", "int a;", "", "int b;", "", ""]:
            body.add(line)
        assert body.text() == "int a;\n\nint b;"

    def test_interior_blank_runs_kept(self):
        body = BodyBuilder()
        for line in ["int a;", "", "", "int b;"]:
            body.add(line)
        assert body.text() == "int a;\n\n\nint b;"

    def test_pragma_once_kept_by_default(self):
        body = BodyBuilder()
        body.add("#pragma once")
        body.add("int a;")
        assert body.text() == "#pragma once\nint a;"

    def test_pragma_once_stripped(self):
        body = BodyBuilder(strip_pragma_once=True)
        for line in ["#pragma once", "", "int a;"]:
            body.add(line)
        assert body.text() == "int a;"


class TestScanSource:
    """Tests for scan_source and strip_directives."""

    def test_scan_collects_directives(self):
        text = '#include <vector>\n#include "a.h"\nusing namespace std;\n#include "b.h"\n\nint f() { return 1; }\n'
        unit = scan_source("/p/lib/x.h", text)

        assert unit.standard_includes == {"#include <vector>"}
        assert unit.using_declarations == {"using namespace std;"}
        assert unit.local_includes == ["a.h", "b.h"]
        assert unit.body == "int f() { return 1; }"

    def test_directives_are_stripped_of_indentation(self):
        unit = scan_source("x.h", "   #include <set>\n\tusing std::set;\n")
        assert unit.standard_includes == {"#include <set>"}
        assert unit.using_declarations == {"using std::set;"}

    def test_crlf_input(self):
        text = "#include <vector>\r\nint a;\r\n\r\nint b;\r\n"
        assert strip_directives(text) == "int a;\n\nint b;"

    def test_strip_directives_only_directives(self):
        assert strip_directives('#include <vector>\n#include "x.h"\nusing namespace std;\n') == ""
