import pytest

from snipsync.config import OriginSpec, SyncConfig
from snipsync.core.diagnostics import DiagnosticKind
from snipsync.core.errors import SourceFetchError
from snipsync.core.overlay import Features
from snipsync.sync import Sync

from conftest import make_source


class FakeProvider:
    """Serves prepared source files keyed by origin pattern."""

    def __init__(self, files_by_origin):
        self.files_by_origin = files_by_origin
        self.fetched = []

    def fetch(self, origin):
        self.fetched.append(origin)
        if origin.pattern not in self.files_by_origin:
            raise SourceFetchError(f"unknown origin {origin}")
        return self.files_by_origin[origin.pattern]


@pytest.fixture
def project(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text(
        "# Guide\n"
        "<!--SNIPSTART greet -->\n"
        "<!--SNIPEND-->\n"
        "<!--SNIPSTART missing -->\n"
        "<!--SNIPEND-->\n",
        encoding="utf-8",
    )
    (docs / "notes.txt").write_text("<!--SNIPSTART greet -->\n<!--SNIPEND-->\n", encoding="utf-8")
    (docs / "plain.md").write_text("No placeholders here.\n", encoding="utf-8")
    return tmp_path


def make_sync(root, provider, **features):
    config = SyncConfig(
        origins=[OriginSpec(pattern="one"), OriginSpec(pattern="two")],
        targets=["docs"],
        features=Features(allowed_target_extensions=[".md"], **features),
        root_dir=root,
    )
    return Sync(config, provider=provider, show_progress=False)


def greet_provider():
    return FakeProvider({
        "one": [make_source(["# @@@SNIPSTART greet", "    print('hello')", "# @@@SNIPEND"],
                            path="hello.py", extension="py")],
        "two": [make_source(["unrelated"], path="other.py", extension="py")],
    })


def test_run_splices_allowed_targets_only(project):
    sync = make_sync(project, greet_provider(), enable_source_link=False)

    result = sync.run()

    assert (project / "docs" / "guide.md").read_text(encoding="utf-8") == (
        "# Guide\n"
        "<!--SNIPSTART greet -->\n"
        "```py\n"
        "    print('hello')\n"
        "```\n"
        "<!--SNIPEND-->\n"
        "<!--SNIPSTART missing -->\n"
        "<!--SNIPEND-->\n"
    )
    assert (project / "docs" / "notes.txt").read_text(encoding="utf-8") == "<!--SNIPSTART greet -->\n<!--SNIPEND-->\n"
    assert result.origins == 2
    assert result.source_files == 2
    assert result.snippets == 1
    assert result.targets_scanned == 2
    assert result.changed_files == ["guide.md"]
    assert len(result.diagnostics.of_kind(DiagnosticKind.UNRESOLVED_SNIPPET_REFERENCE)) == 1
    assert result.has_warnings


def test_run_twice_changes_nothing_the_second_time(project):
    make_sync(project, greet_provider()).run()
    first = (project / "docs" / "guide.md").read_text(encoding="utf-8")

    result = make_sync(project, greet_provider()).run()

    assert result.changed_files == []
    assert (project / "docs" / "guide.md").read_text(encoding="utf-8") == first


def test_dedenting_applied_when_enabled(project):
    make_sync(project, greet_provider(), enable_source_link=False, enable_code_dedenting=True).run()

    content = (project / "docs" / "guide.md").read_text(encoding="utf-8")

    assert "```py\nprint('hello')\n```" in content


def test_clear_restores_placeholders(project):
    original = (project / "docs" / "guide.md").read_text(encoding="utf-8")
    make_sync(project, greet_provider()).run()

    result = make_sync(project, FakeProvider({})).clear()

    assert (project / "docs" / "guide.md").read_text(encoding="utf-8") == original
    assert result.changed_files == ["guide.md"]


def test_clear_does_not_fetch_sources(project):
    provider = FakeProvider({})

    make_sync(project, provider).clear()

    assert provider.fetched == []


def test_later_origin_wins_duplicate_ids(project):
    provider = FakeProvider({
        "one": [make_source(["// @@@SNIPSTART greet", "first", "// @@@SNIPEND"], path="a.go")],
        "two": [make_source(["// @@@SNIPSTART greet", "second", "// @@@SNIPEND"], path="b.go")],
    })

    result = make_sync(project, provider, enable_source_link=False, enable_code_block=False).run()

    assert "second" in (project / "docs" / "guide.md").read_text(encoding="utf-8")
    assert len(result.diagnostics.of_kind(DiagnosticKind.DUPLICATE_SNIPPET_ID)) == 1


def test_fetch_failure_aborts_without_writing(project):
    original = (project / "docs" / "guide.md").read_text(encoding="utf-8")
    provider = FakeProvider({"one": []})

    with pytest.raises(SourceFetchError):
        make_sync(project, provider).run()

    assert (project / "docs" / "guide.md").read_text(encoding="utf-8") == original


def test_missing_target_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        make_sync(tmp_path, greet_provider()).run()


def test_dedenting_leaves_files_without_placeholders_alone(project):
    guide = project / "docs" / "install.md"
    original = "1. Install:\n   ```bash\n   npm install\n   ```\n   Then run it.\n"
    guide.write_text(original, encoding="utf-8")

    result = make_sync(project, greet_provider(), enable_code_dedenting=True).run()

    assert guide.read_text(encoding="utf-8") == original
    assert "install.md" not in result.changed_files


def test_dedenting_only_touches_spliced_lines(project):
    guide = project / "docs" / "guide.md"
    guide.write_text(
        "- Step one:\n"
        "  <!--SNIPSTART greet -->\n"
        "  <!--SNIPEND-->\n"
        "    indented prose\n",
        encoding="utf-8",
    )

    make_sync(project, greet_provider(), enable_source_link=False, enable_code_dedenting=True).run()

    assert guide.read_text(encoding="utf-8") == (
        "- Step one:\n"
        "  <!--SNIPSTART greet -->\n"
        "```py\n"
        "print('hello')\n"
        "```\n"
        "  <!--SNIPEND-->\n"
        "    indented prose\n"
    )
