"""Environment and loader tests."""

from __future__ import annotations

import logging
import sys
import threading

import pytest

from jens import (
    DictLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateNotFoundError,
    TemplateSyntaxError,
)

from .sources import EMOJI_SOURCE


class TestEnvironment:
    def test_get_file(self, env):
        file = env.get_file("emoji.jens")
        assert file.names == ("entry", "main")
        assert file.name == "emoji.jens"

    def test_get_template(self, env):
        block = env.get_template("validator.jens", "type_def")
        assert block.set("field_name", "a").set("field_type", "b").render() == "a: b;"

    def test_missing_file(self, env):
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'emoji.jens'"):
            env.get_file("emoji.jen")

    def test_missing_template(self, env):
        with pytest.raises(TemplateNotFoundError, match="not found in emoji.jens"):
            env.get_template("emoji.jens", "missing")

    def test_syntax_error_names_the_file(self, env):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            env.get_file("broken.jens")
        assert exc_info.value.name == "broken.jens"
        assert "broken.jens:1" in str(exc_info.value)

    def test_from_string(self):
        env = Environment()
        file = env.from_string("a = ${b}\n", name="inline")
        assert file.name == "inline"
        assert env.cache_info()["size"] == 0

    def test_no_loader(self):
        env = Environment()
        with pytest.raises(RuntimeError, match="no loader"):
            env.get_file("x.jens")
        assert env.list_files() == []

    def test_list_files(self, env):
        assert env.list_files() == ["broken.jens", "emoji.jens", "validator.jens"]

    def test_disallow_duplicates(self):
        env = Environment(loader=DictLoader({"d.jens": "a = 1\na = 2\n"}), allow_duplicates=False)
        with pytest.raises(TemplateSyntaxError, match="Duplicate template name 'a'"):
            env.get_file("d.jens")
        with pytest.raises(TemplateSyntaxError):
            env.from_string("a = 1\na = 2\n")

    def test_negative_cache_size(self):
        with pytest.raises(ValueError, match="cache_size"):
            Environment(cache_size=-1)

    def test_repr(self, env):
        assert repr(env) == "<Environment loader=DictLoader cache_size=64>"


class TestCache:
    def test_hit(self, env):
        first = env.get_file("emoji.jens")
        second = env.get_file("emoji.jens")
        assert first is second
        assert env.cache_info() == {"size": 1, "max_size": 64, "hits": 1, "misses": 1}

    def test_lookups_stay_fresh(self, env):
        a = env.get_template("emoji.jens", "entry")
        b = env.get_template("emoji.jens", "entry")
        assert a is not b

    def test_clear(self, env):
        first = env.get_file("emoji.jens")
        env.clear_cache()
        assert env.cache_info() == {"size": 0, "max_size": 64, "hits": 0, "misses": 0}
        assert env.get_file("emoji.jens") is not first

    def test_lru_eviction(self):
        loader = DictLoader({f"{i}.jens": f"t = {i}\n" for i in range(3)})
        env = Environment(loader=loader, cache_size=2)
        zero = env.get_file("0.jens")
        env.get_file("1.jens")
        env.get_file("0.jens")
        env.get_file("2.jens")
        assert env.cache_info()["size"] == 2
        assert env.get_file("0.jens") is zero
        assert env.cache_info()["misses"] == 3

    def test_disabled(self):
        env = Environment(loader=DictLoader({"a.jens": "a = 1\n"}), cache_size=0)
        assert env.get_file("a.jens") is not env.get_file("a.jens")
        assert env.cache_info()["size"] == 0

    def test_debug_logging(self, env, caplog):
        with caplog.at_level(logging.DEBUG, logger="jens"):
            env.get_file("emoji.jens")
        assert "Loaded template file 'emoji.jens' (2 template(s))" in caplog.text

    def test_concurrent_access(self, env):
        results = []

        def worker():
            for _ in range(50):
                results.append(env.get_template("emoji.jens", "entry").set("key", "k").render())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 400
        assert set(results) == {'"k": "${value}",'}
        assert env.cache_info()["size"] == 1


class TestFileSystemLoader:
    def test_load(self, tmp_path):
        (tmp_path / "emoji.jens").write_text(EMOJI_SOURCE)
        env = Environment(loader=FileSystemLoader(tmp_path))
        file = env.get_file("emoji.jens")
        assert file.filename == str(tmp_path / "emoji.jens")
        assert "main" in file

    def test_search_order(self, tmp_path):
        custom = tmp_path / "custom"
        default = tmp_path / "default"
        custom.mkdir()
        default.mkdir()
        (custom / "a.jens").write_text("t = custom\n")
        (default / "a.jens").write_text("t = default\n")
        (default / "b.jens").write_text("t = fallback\n")
        env = Environment(loader=FileSystemLoader([custom, default]))
        assert env.get_template("a.jens", "t").render() == "custom"
        assert env.get_template("b.jens", "t").render() == "fallback"

    def test_not_found(self, tmp_path):
        loader = FileSystemLoader(str(tmp_path))
        with pytest.raises(TemplateNotFoundError, match="'missing.jens' not found in"):
            loader.get_source("missing.jens")

    def test_not_found_suggests_listed_file(self, tmp_path):
        (tmp_path / "validator.jens").write_text("")
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'validator.jens'"):
            FileSystemLoader(tmp_path).get_source("validatr.jens")

    def test_list_templates(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "a.jens").write_text("")
        (tmp_path / "sub" / "b.jens").write_text("")
        (tmp_path / "notes.txt").write_text("")
        assert FileSystemLoader(tmp_path).list_templates() == ["a.jens", "sub/b.jens"]

    def test_extensions(self, tmp_path):
        (tmp_path / "a.jens").write_text("")
        (tmp_path / "b.tmpl").write_text("")
        loader = FileSystemLoader(tmp_path, extensions=(".tmpl",))
        assert loader.list_templates() == ["b.tmpl"]

    def test_syntax_error_points_at_path(self, tmp_path):
        (tmp_path / "bad.jens").write_text("ok = 1\n  stray\n")
        env = Environment(loader=FileSystemLoader(tmp_path))
        with pytest.raises(TemplateSyntaxError) as exc_info:
            env.get_file("bad.jens")
        assert exc_info.value.filename == str(tmp_path / "bad.jens")
        assert exc_info.value.lineno == 2


class TestDictLoader:
    def test_load(self):
        source, filename = DictLoader({"a.jens": "a = 1\n"}).get_source("a.jens")
        assert source == "a = 1\n"
        assert filename is None

    def test_available(self):
        loader = DictLoader({"alpha.jens": "", "beta.jens": ""})
        with pytest.raises(TemplateNotFoundError, match="Available: alpha.jens, beta.jens"):
            loader.get_source("zzz")


class TestPackageLoader:
    @pytest.fixture()
    def mock_package(self, tmp_path):
        """Create a package shipping template files."""
        pkg_dir = tmp_path / "jens_test_pkg"
        pkg_dir.mkdir()
        (pkg_dir / "__init__.py").write_text("")

        tmpl_dir = pkg_dir / "templates"
        tmpl_dir.mkdir()
        (tmpl_dir / "emoji.jens").write_text(EMOJI_SOURCE)

        sub_dir = tmpl_dir / "ts"
        sub_dir.mkdir()
        (sub_dir / "brace.jens").write_text("close = }\n")

        sys.path.insert(0, str(tmp_path))
        yield "jens_test_pkg"
        sys.path.remove(str(tmp_path))
        sys.modules.pop("jens_test_pkg", None)

    def test_load(self, mock_package):
        env = Environment(loader=PackageLoader(mock_package))
        file = env.get_file("emoji.jens")
        assert file.names == ("entry", "main")
        assert file.filename == "jens_test_pkg/templates/emoji.jens"

    def test_subdirectory(self, mock_package):
        env = Environment(loader=PackageLoader(mock_package, "templates"))
        assert env.get_template("ts/brace.jens", "close").render() == "}"

    def test_not_found(self, mock_package):
        loader = PackageLoader(mock_package)
        with pytest.raises(TemplateNotFoundError, match="not found in package"):
            loader.get_source("missing.jens")

    def test_list_templates(self, mock_package):
        assert PackageLoader(mock_package).list_templates() == ["emoji.jens", "ts/brace.jens"]

    def test_list_templates_skips_other_files(self, mock_package, tmp_path):
        (tmp_path / "jens_test_pkg" / "templates" / "README.md").write_text("")
        assert PackageLoader(mock_package).list_templates() == ["emoji.jens", "ts/brace.jens"]
        loader = PackageLoader(mock_package, extensions=(".md",))
        assert loader.list_templates() == ["README.md"]

    def test_not_found_suggests_listed_file(self, mock_package):
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'ts/brace.jens'"):
            PackageLoader(mock_package).get_source("ts/brace.jen")
