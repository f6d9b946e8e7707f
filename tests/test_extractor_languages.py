"""Tests for the non-JavaScript import and export extractors."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from coderef.extractor import (
    EXTRACTORS,
    CLikeExtractor,
    GoExtractor,
    JavaExtractor,
    JavaScriptExtractor,
    PhpExtractor,
    PythonExtractor,
    RubyExtractor,
    RustExtractor,
    get_extractor,
)
from coderef.languages import family_for
from coderef.models import ExportKind, ImportKind


class TestDispatch:
    """Test extractor selection by file extension."""

    def test_by_extension(self):
        assert isinstance(get_extractor("app.py"), PythonExtractor)
        assert isinstance(get_extractor("src/App.vue"), JavaScriptExtractor)
        assert isinstance(get_extractor("lib.rs"), RustExtractor)
        assert isinstance(get_extractor("util.h"), CLikeExtractor)

    def test_unknown_extension(self):
        assert get_extractor("notes.txt") is None
        assert get_extractor("Makefile") is None

    def test_extractors_serve_their_families(self):
        for family, extractor in EXTRACTORS.items():
            assert family in extractor.families

    def test_every_extractor_reachable_from_a_path(self):
        samples = ["a.ts", "a.py", "a.go", "a.rs", "A.java", "a.c", "a.rb", "a.php"]
        found = {type(get_extractor(path)) for path in samples}
        assert found == {type(extractor) for extractor in EXTRACTORS.values()}
        assert all(family_for(path) in EXTRACTORS for path in samples)


class TestPythonExtractor:
    """Test Python imports and exports."""

    def test_plain_imports(self):
        code = "import os\nimport os.path as osp, sys\n"
        records = PythonExtractor().extract_imports(code, "app.py")
        assert [(r.source, r.imported_names) for r in records] == [
            ("os", ["os"]),
            ("os.path", ["osp"]),
            ("sys", ["sys"]),
        ]
        assert all(r.kind == ImportKind.PYTHON_IMPORT for r in records)
        assert records[2].line == 2

    def test_from_import(self):
        records = PythonExtractor().extract_imports("from app.models import User, Group as G\n", "a.py")
        assert records[0].kind == ImportKind.PYTHON_FROM
        assert records[0].source == "app.models"
        assert records[0].imported_names == ["User", "Group"]

    def test_relative_from_import(self):
        records = PythonExtractor().extract_imports("from ..utils import helper\nfrom . import views\n", "a.py")
        assert [r.source for r in records] == ["..utils", "."]

    def test_parenthesized_names(self):
        code = "from .models import (\n    User,\n    Group,\n)\n"
        records = PythonExtractor().extract_imports(code, "a.py")
        assert records[0].imported_names == ["User", "Group"]
        assert records[0].line == 1

    def test_commented_import_skipped(self):
        records = PythonExtractor().extract_imports("# import os\nimport sys\n", "a.py")
        assert [r.source for r in records] == ["sys"]

    def test_dunder_all_exports(self):
        code = "__all__ = ['get_user', \"save_user\"]\n\ndef get_user(): pass\ndef _hidden(): pass\n"
        records = PythonExtractor().extract_exports(code, "user.py")
        assert [(r.kind, r.name) for r in records] == [
            (ExportKind.DUNDER_ALL, "get_user"),
            (ExportKind.DUNDER_ALL, "save_user"),
        ]

    def test_public_top_level_without_all(self):
        code = "def get_user():\n    def inner(): pass\n\nclass User:\n    pass\n\ndef _private(): pass\n"
        records = PythonExtractor().extract_exports(code, "user.py")
        assert [(r.kind, r.name) for r in records] == [
            (ExportKind.PUBLIC, "get_user"),
            (ExportKind.PUBLIC, "User"),
        ]


class TestGoExtractor:
    """Test Go imports and exports."""

    def test_single_import(self):
        records = GoExtractor().extract_imports('package main\n\nimport "fmt"\n', "main.go")
        assert [(r.source, r.imported_names, r.line) for r in records] == [("fmt", ["fmt"], 3)]

    def test_import_block(self):
        code = 'import (\n\t"fmt"\n\tlog "github.com/sirupsen/logrus"\n)\n'
        records = GoExtractor().extract_imports(code, "main.go")
        assert [(r.source, r.imported_names, r.line) for r in records] == [
            ("fmt", ["fmt"], 2),
            ("github.com/sirupsen/logrus", ["log"], 3),
        ]

    def test_exported_declarations(self):
        code = "func Handle() {}\nfunc helper() {}\nfunc (s *Server) Start() {}\ntype Config struct {}\n"
        records = GoExtractor().extract_exports(code, "server.go")
        assert [r.name for r in records] == ["Handle", "Start", "Config"]


class TestRustExtractor:
    """Test Rust imports and exports."""

    def test_use_statements(self):
        code = "use std::collections::HashMap;\nuse crate::models::{User, Group as G};\n"
        records = RustExtractor().extract_imports(code, "lib.rs")
        assert [(r.source, r.imported_names) for r in records] == [
            ("std::collections::HashMap", ["HashMap"]),
            ("crate::models", ["User", "Group"]),
        ]

    def test_mod_and_extern_crate(self):
        code = "extern crate serde;\nmod config;\npub mod api;\nmod inline {}\n"
        records = RustExtractor().extract_imports(code, "lib.rs")
        assert [(r.kind, r.source) for r in records] == [
            (ImportKind.EXTERN_CRATE, "serde"),
            (ImportKind.RUST_MOD, "config"),
            (ImportKind.RUST_MOD, "api"),
        ]

    def test_pub_items(self):
        code = "pub fn run() {}\nfn private() {}\npub struct Config;\npub(crate) enum Mode {}\npub use self::api::Client;\n"
        records = RustExtractor().extract_exports(code, "lib.rs")
        assert [(r.kind, r.name) for r in records] == [
            (ExportKind.PUBLIC, "run"),
            (ExportKind.PUBLIC, "Config"),
            (ExportKind.PUBLIC, "Mode"),
            (ExportKind.RE_EXPORT, "Client"),
        ]


class TestJavaExtractor:
    """Test JVM-family imports and exports."""

    def test_imports(self):
        code = (
            "package com.example;\n\n"
            "import java.util.List;\n"
            "import static org.junit.Assert.assertEquals;\n"
            "import com.example.model.*;\n"
        )
        records = JavaExtractor().extract_imports(code, "App.java")
        assert [(r.source, r.imported_names) for r in records] == [
            ("java.util.List", ["List"]),
            ("org.junit.Assert.assertEquals", ["assertEquals"]),
            ("com.example.model.*", []),
        ]

    def test_kotlin_alias(self):
        records = JavaExtractor().extract_imports("import com.example.User as Member\n", "App.kt")
        assert records[0].imported_names == ["Member"]

    def test_public_types(self):
        code = "public class UserService {\n}\nclass Hidden {}\npublic final class Util {}\n"
        records = JavaExtractor().extract_exports(code, "UserService.java")
        assert [r.name for r in records] == ["UserService", "Util"]


class TestCLikeExtractor:
    """Test C-family imports."""

    def test_includes(self):
        code = '#include <stdio.h>\n#include "user.h"\n#include "../lib/db.h"\n'
        records = CLikeExtractor().extract_imports(code, "main.c")
        assert [r.source for r in records] == ["stdio.h", "./user.h", "../lib/db.h"]
        assert all(r.kind == ImportKind.INCLUDE for r in records)

    def test_csharp_using(self):
        code = "using System.Text;\nusing Json = Newtonsoft.Json;\n"
        records = CLikeExtractor().extract_imports(code, "App.cs")
        assert [(r.source, r.imported_names) for r in records] == [
            ("System.Text", ["Text"]),
            ("Newtonsoft.Json", ["Json"]),
        ]

    def test_swift_and_dart_imports(self):
        assert CLikeExtractor().extract_imports("import Foundation\n", "App.swift")[0].source == "Foundation"
        records = CLikeExtractor().extract_imports("import 'package:http/http.dart';\n", "main.dart")
        assert records[0].source == "package:http/http.dart"

    def test_no_exports(self):
        assert CLikeExtractor().extract_exports("int main() {}\n", "main.c") == []


class TestRubyExtractor:
    """Test Ruby requires."""

    def test_requires(self):
        code = "require 'json'\nrequire_relative 'models/user'\nload \"tasks.rb\"\n"
        records = RubyExtractor().extract_imports(code, "app.rb")
        assert [r.source for r in records] == ["json", "./models/user", "tasks.rb"]
        assert [r.line for r in records] == [1, 2, 3]


class TestPhpExtractor:
    """Test PHP imports."""

    def test_use(self):
        code = "<?php\nuse App\\Models\\User;\nuse App\\Services\\{Mailer, Logger as Log};\n"
        records = PhpExtractor().extract_imports(code, "index.php")
        assert [(r.source, r.imported_names) for r in records] == [
            ("App\\Models\\User", ["User"]),
            ("App\\Services", ["Mailer", "Log"]),
        ]

    def test_require(self):
        code = "<?php\nrequire_once 'config.php';\ninclude(__DIR__ . '/x.php');\ninclude 'header.php';\n"
        records = PhpExtractor().extract_imports(code, "index.php")
        assert [r.source for r in records] == ["config.php", "header.php"]
