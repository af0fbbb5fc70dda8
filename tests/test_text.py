import pytest

from hypecommit.text import clean_commit_message, strip_ansi, truncate_path, visible_width


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hello World", 11),
        ("\u001b[32mHello\u001b[0m \u001b[31mWorld\u001b[0m", 11),
        ("", 0),
        ("\u001b[1m\u001b[32mBold Green\u001b[0m", 10),
        ("\u001b[0m\u001b[1;4m", 0),
        ("\u001b[38;5;208mX\u001b[0m", 1),
        ("\u001b[2K\u001b[1Adone", 4),
    ],
)
def test_visible_width(text, expected):
    assert visible_width(text) == expected


@pytest.mark.parametrize("text", ["src/app.py", "feat: add feature", "  padded  ", "a"])
def test_visible_width_ignores_wrapping_escapes(text):
    wrapped = f"\u001b[1m\u001b[33m{text}\u001b[0m"
    assert visible_width(text) == len(text)
    assert visible_width(wrapped) == visible_width(text)
    assert strip_ansi(wrapped) == text


def test_visible_width_keeps_lone_escape_character():
    # not a complete sequence, so nothing is stripped
    assert visible_width("\u001b") == 1


@pytest.mark.parametrize(
    "path, max_length, expected",
    [
        ("src/file.ts", 30, "src/file.ts"),
        ("very/long/path/to/some/deeply/nested/file.ts", 20, "...ly/nested/file.ts"),
        ("exactly/twenty/chars.ts", 20, "...y/twenty/chars.ts"),
        ("long/path/file.ts", 5, "...ts"),
        ("abc", 3, "abc"),
        ("twenty/chars/long.ts", 20, "twenty/chars/long.ts"),
    ],
)
def test_truncate_path(path, max_length, expected):
    assert truncate_path(path, max_length) == expected


@pytest.mark.parametrize("max_length", [4, 8, 12, 19])
def test_truncated_path_has_exact_width_and_keeps_the_tail(max_length):
    path = "packages/core/src/components/Button.tsx"
    result = truncate_path(path, max_length)
    assert visible_width(result) == max_length
    assert result.startswith("...")
    assert path.endswith(result[3:])


@pytest.mark.parametrize("max_length", [0, 1, 2, 3])
def test_truncate_path_tiny_limit_leaves_only_ellipsis(max_length):
    assert truncate_path("long/path/file.ts", max_length) == "..."


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("```plaintext\nfeat: add new feature\n```", "feat: add new feature"),
        ("```text\nfeat: add new feature\n```", "feat: add new feature"),
        ("```PLAINTEXT\nfeat: add new feature\n```", "feat: add new feature"),
        ("```plaintext\n\nfeat: add new feature\n```", "feat: add new feature"),
        ("```feat: add new feature```", "feat: add new feature"),
        ("```plaintext\n  feat: add new feature  \n```", "feat: add new feature"),
        ("feat: add new feature", "feat: add new feature"),
        ("```plaintext\n```", ""),
        ("```\nfix: handle empty diff\n```", "fix: handle empty diff"),
        ("  ```text\nfeat: x\n```\n", "feat: x"),
        ("```PlainText\nFeat: Keep Case\n```", "Feat: Keep Case"),
        ("```plaintext\r\nfeat: add new feature\r\n```", "feat: add new feature"),
        ("```text \t\r\n\r\nfix: windows line endings\r\n```", "fix: windows line endings"),
    ],
)
def test_clean_commit_message(raw, expected):
    assert clean_commit_message(raw) == expected


def test_clean_commit_message_keeps_inner_backticks():
    raw = "```\nfix: quote `config.yml` path\n```"
    assert clean_commit_message(raw) == "fix: quote `config.yml` path"


def test_clean_commit_message_strips_only_outer_fence():
    raw = "```\n```js\ncode\n```\n```"
    assert clean_commit_message(raw) == "```js\ncode\n```"


@pytest.mark.parametrize(
    "raw",
    [
        "```plaintext\nfeat: no closing fence",
        "`feat: single backticks`",
        "feat: trailing fence```",
    ],
)
def test_clean_commit_message_passes_through_unwrapped_text(raw):
    assert clean_commit_message(raw) == raw
