import pytest

from pineblog.domain.content import (
    SLUG_PATTERN,
    is_valid_slug,
    restore_urls,
    rewrite_urls,
    slugify,
)

BASE = "http://127.0.0.1:10000/devstoreaccount1/pineblog-tests"
PH = "%URL%"


# --- slugify ---


@pytest.mark.parametrize(
    "title,expected",
    [
        ("title or slug", "title-or-slug"),
        ("Hello, World!", "hello-world"),
        ("  --Leading and trailing--  ", "leading-and-trailing"),
        ("Multiple   spaces & symbols", "multiple-spaces-symbols"),
        ("Crème brûlée à la carte", "creme-brulee-a-la-carte"),
        ("Python 3.12 release", "python-3-12-release"),
        ("already-a-slug", "already-a-slug"),
        ("Straße café", "strasse-cafe"),
        ("Smørrebrød og Łódź", "smorrebrod-og-lodz"),
        ("Æsir Đorđe", "aesir-dorde"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_slugify_is_deterministic():
    title = "The Same Title, Twice"
    assert slugify(title) == slugify(title)


def test_slugify_output_matches_grammar():
    for title in ["a", "A--B", "!!x!!", "x_y_z", "Ünïcödé", "1 2 3", "--"]:
        assert SLUG_PATTERN.match(slugify(title)), title


def test_slugify_without_usable_characters_is_hashed():
    slug = slugify("日本語のタイトル")
    assert slug.startswith("post-")
    assert is_valid_slug(slug)
    assert slug == slugify("日本語のタイトル")
    assert slug != slugify("别的标题")


def test_different_titles_may_share_a_slug():
    assert slugify("Hello World") == slugify("hello, world!")


def test_is_valid_slug():
    assert is_valid_slug("a-b-c")
    assert not is_valid_slug("-a")
    assert not is_valid_slug("a--b")
    assert not is_valid_slug("A")
    assert not is_valid_slug("")


# --- rewrite_urls ---


def test_rewrite_single_url():
    assert rewrite_urls(f"{BASE}/blog-cover-url", BASE, PH) == "%URL%/blog-cover-url"


def test_rewrite_multiple_urls():
    text = f"one {BASE}/a.png, two ({BASE}/b/c.png) and {BASE}."
    assert rewrite_urls(text, BASE, PH) == "one %URL%/a.png, two (%URL%/b/c.png) and %URL%."


def test_rewrite_no_urls():
    assert rewrite_urls("plain text", BASE, PH) == "plain text"
    assert rewrite_urls("", BASE, PH) == ""
    assert rewrite_urls(None, BASE, PH) is None


def test_rewrite_keeps_query_and_fragment():
    text = f"{BASE}/img.png?w=200#top"
    assert rewrite_urls(text, BASE, PH) == "%URL%/img.png?w=200#top"


@pytest.mark.parametrize(
    "text",
    [
        "http://127.0.0.1:10000/devstoreaccount1/pineblog-tests-old/x.png",
        "http://127.0.0.1:10000/devstoreaccount1/pineblog-testsx/x.png",
        "https://127.0.0.1:10000/devstoreaccount1/pineblog-tests/x.png",
        "http://127.0.0.1:10001/devstoreaccount1/pineblog-tests/x.png",
        "xhttp://127.0.0.1:10000/devstoreaccount1/pineblog-tests/x.png",
        "http://127.0.0.1:10000/devstoreaccount1/pineblog-tests.example/x",
        f"https://proxy.example.com/?u={BASE}/x",
        f"https://proxy.example.com/go?a=1&next={BASE}/x",
        f"https://user:{BASE}/x",
    ],
)
def test_rewrite_leaves_non_matching_urls(text):
    assert rewrite_urls(text, BASE, PH) == text


@pytest.mark.parametrize(
    "text,expected",
    [
        (f"<img src=\"{BASE}/a.png\">", "<img src=\"%URL%/a.png\">"),
        (f"<a href='{BASE}/a'>", "<a href='%URL%/a'>"),
        (f"![cover]({BASE}/c.png)", "![cover](%URL%/c.png)"),
        (f"<p>{BASE}/p</p>", "<p>%URL%/p</p>"),
        (f"[{BASE}/b]", "[%URL%/b]"),
        (f"line\n{BASE}/n", "line\n%URL%/n"),
    ],
)
def test_rewrite_at_url_token_start(text, expected):
    assert rewrite_urls(text, BASE, PH) == expected


def test_rewrite_base_with_trailing_slash():
    assert rewrite_urls(f"{BASE}/x.png", BASE + "/", PH) == "%URL%/x.png"


def test_rewrite_empty_base_is_noop():
    assert rewrite_urls(f"{BASE}/x.png", "", PH) == f"{BASE}/x.png"


@pytest.mark.parametrize(
    "text",
    [
        f"{BASE}/x.png",
        f"a {BASE}/1 b {BASE}/2 c http://other/3",
        "no urls at all",
        f"{BASE}",
        f"%URL%/already {BASE}/new",
    ],
)
def test_rewrite_is_idempotent(text):
    once = rewrite_urls(text, BASE, PH)
    assert rewrite_urls(once, BASE, PH) == once


@pytest.mark.parametrize("placeholder", [f"[{BASE}]", f"{BASE}/v2"])
def test_rewrite_rejects_placeholder_containing_base(placeholder):
    with pytest.raises(ValueError, match="must not contain the base URL"):
        rewrite_urls(f"{BASE}/x.png", BASE, placeholder)


def test_rewrite_placeholder_check_uses_normalised_base():
    with pytest.raises(ValueError):
        rewrite_urls("text", BASE + "/", f"{BASE}/v2")


# --- restore_urls ---


def test_restore_urls_inverts_rewrite():
    text = f"cover {BASE}/a.png and {BASE}/b.png"
    assert restore_urls(rewrite_urls(text, BASE, PH), BASE, PH) == text


def test_restore_urls_none_passthrough():
    assert restore_urls(None, BASE, PH) is None
