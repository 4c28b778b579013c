from __future__ import annotations

import pytest

from changewriter.classify.buckets import classify_commits
from changewriter.outputs.md_out import (
    RenderOptions,
    build_heading,
    build_markdown,
    commit_url,
    link_pull_requests,
    render_commit_line,
)
from changewriter.records import CommitRecord

from conftest import FIXED_DAY

GITHUB = "https://github.com/org/repo"


def render(commits, taxonomy, options):
    return build_markdown(classify_commits(commits, taxonomy), taxonomy, options, today=FIXED_DAY)


def test_linked_fix_with_closes_annotation():
    commit = CommitRecord(hash="abcdef1234", subject="fix bug #7", body="Closes #7", type="fix")
    output = render([commit], {"fix": "Bug Fixes"}, RenderOptions(patch=True, repo_url=GITHUB))

    assert "##### Bug Fixes" in output.split("\n")
    assert (
        "* fix bug [#7](https://github.com/org/repo/pull/7) "
        "([abcdef12](https://github.com/org/repo/commit/abcdef1234)) (7)"
    ) in output.split("\n")


def test_unlinked_line_keeps_plain_hash_and_subject():
    commit = CommitRecord(hash="abcdef1234", subject="fix bug #7", body="Closes #7", type="fix")
    assert render_commit_line("*", commit) == "* fix bug #7 (abcdef12) (7)"


def test_breaking_change_is_appended_as_sub_bullet(make_commit):
    commit = make_commit("rename", body="BREAKING CHANGE: renamed API\nmore text")
    line = render_commit_line("*", commit)
    assert line.endswith("\n\t* breaking changes: renamed API")


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        (RenderOptions(major=True, version="2.0.0"), "## 2.0.0 (2024-03-05)"),
        (RenderOptions(minor=True), "### 2024-03-05"),
        (RenderOptions(patch=True, version="1.0.1"), "#### 1.0.1 (2024-03-05)"),
        (RenderOptions(), "#### 2024-03-05"),
    ],
)
def test_heading_depth_follows_release_level(options, expected):
    assert build_heading(options, FIXED_DAY) == expected


def test_full_document_layout(taxonomy):
    commits = [
        CommitRecord(hash="a" * 40, subject="add a", type="feat", category="api"),
        CommitRecord(hash="c" * 40, subject="fix c", type="fix"),
        CommitRecord(hash="b" * 40, subject="add b", type="feat", category="api"),
        CommitRecord(hash="d" * 40, subject="add d", type="feat", category="ui"),
    ]

    output = render(commits, taxonomy, RenderOptions(version="1.0.0", minor=True))

    assert output == "\n".join(
        [
            "### 1.0.0 (2024-03-05)",
            "",
            "##### Features",
            "",
            "* **api:**",
            "  * add a (aaaaaaaa) ",
            "  * add b (bbbbbbbb) ",
            "* **ui:** add d (dddddddd) ",
            "",
            "##### Bug Fixes",
            "",
            "* fix c (cccccccc) ",
            "",
            "",
        ]
    )


def test_unnamed_category_never_nests(make_commit, taxonomy):
    commits = [make_commit("one"), make_commit("two")]
    lines = render(commits, taxonomy, RenderOptions()).split("\n")
    assert lines[4].startswith("* one (")
    assert lines[5].startswith("* two (")


def test_unknown_type_section_uses_code_when_unlabelled(make_commit):
    output = render([make_commit("mystery", type="bogus")], {"fix": "Bug Fixes"}, RenderOptions())
    assert "##### other" in output.split("\n")
    assert "##### bogus" not in output


def test_empty_history_renders_heading_only():
    assert build_markdown({}, {}, RenderOptions(), today=FIXED_DAY) == "#### 2024-03-05\n\n"


def test_rendering_is_idempotent(make_commit, taxonomy):
    commits = [make_commit("a", category="x"), make_commit("b", type="fix")]
    options = RenderOptions(repo_url=GITHUB)
    assert render(commits, taxonomy, options) == render(commits, taxonomy, options)


@pytest.mark.parametrize(
    ("base_url", "expected"),
    [
        ("https://github.com/org/repo", "https://github.com/org/repo/commit/abc"),
        ("https://bitbucket.org/org/repo", "https://bitbucket.org/org/repo/commits/abc"),
        ("https://gitlab.com/org/repo.git", "https://gitlab.com/org/repo/commit/abc"),
        ("https://github.com/org/repo.git", "https://github.com/org/repo.git/commit/abc"),
    ],
)
def test_commit_url_per_provider(base_url, expected):
    assert commit_url(base_url, "abc") == expected


def test_link_pull_requests_rewrites_every_reference():
    assert link_pull_requests("merge #3 and #41", GITHUB) == (
        f"merge [#3]({GITHUB}/pull/3) and [#41]({GITHUB}/pull/41)"
    )


def test_options_from_mapping():
    options = RenderOptions.from_mapping({"version": "1.2.3", "minor": True, "repoUrl": GITHUB})
    assert options == RenderOptions(version="1.2.3", minor=True, repo_url=GITHUB)
