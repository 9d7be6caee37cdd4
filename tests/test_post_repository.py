"""Tests for the blog post repository."""

import math
import pytest
from conftest import write_markdown
from app.services.frontmatter import MalformedDocumentError
from app.services.post_repository import PostRepository, calculate_read_time


def test_calculate_read_time():
    """Test read time rounding up to whole minutes."""
    assert calculate_read_time("word " * 200) == "1 min read"
    assert calculate_read_time("word " * 201) == "2 min read"
    assert calculate_read_time("word " * 1000) == "5 min read"


def test_calculate_read_time_empty_body():
    """Test that an empty body still reads as one minute."""
    assert calculate_read_time("") == "1 min read"
    assert calculate_read_time("   \n ") == "1 min read"


def test_post_defaults(posts_dir, post_repository):
    """Test defaults for a post with an empty front-matter."""
    body = "one two three\n"
    write_markdown(posts_dir / "bare.md", {}, body)

    post = post_repository.find_by_slug("bare")

    assert post.slug == "bare"
    assert post.title == ""
    assert post.date == ""
    assert post.excerpt == ""
    assert post.tags == []
    assert post.published is True
    assert post.content == body
    assert post.readTime == "1 min read"


def test_post_without_front_matter(posts_dir, post_repository):
    """Test that a plain Markdown file is a post with defaults."""
    write_markdown(posts_dir / "plain.md", None, "Just text.\n")

    posts = post_repository.list_published()

    assert [p.slug for p in posts] == ["plain"]
    assert posts[0].content == "Just text.\n"


def test_computed_read_time_matches_word_count(posts_dir, post_repository):
    """Test that readTime is ceil(words / 200) when not supplied."""
    body = " ".join(["lorem"] * 450)
    write_markdown(posts_dir / "long.md", {"title": "Long"}, body)

    post = post_repository.find_by_slug("long")

    assert post.readTime == f"{math.ceil(450 / 200)} min read"


def test_explicit_read_time_is_kept(posts_dir, post_repository):
    """Test that a supplied readTime wins over the computed one."""
    write_markdown(posts_dir / "quick.md", {"readTime": "12 min read"}, "short")
    write_markdown(posts_dir / "numeric.md", {"readTime": 7}, "short")

    assert post_repository.find_by_slug("quick").readTime == "12 min read"
    assert post_repository.find_by_slug("numeric").readTime == "7"


def test_words_per_minute_is_configurable(posts_dir):
    """Test a custom reading speed."""
    write_markdown(posts_dir / "post.md", {}, " ".join(["w"] * 100))
    repository = PostRepository(posts_dir, words_per_minute=50)

    assert repository.find_by_slug("post").readTime == "2 min read"


def test_unpublished_posts_excluded_from_listing(posts_dir, post_repository):
    """Test that drafts are hidden from the listing but fetchable by slug."""
    write_markdown(posts_dir / "live.md", {"title": "Live", "date": "2024-01-01"})
    write_markdown(posts_dir / "draft.md", {"title": "Draft", "date": "2024-02-01", "published": False})

    slugs = [p.slug for p in post_repository.list_published()]
    draft = post_repository.find_by_slug("draft")

    assert slugs == ["live"]
    assert draft is not None
    assert draft.published is False
    assert draft.title == "Draft"


def test_only_explicit_false_unpublishes(posts_dir, post_repository):
    """Test that published values other than false keep the post visible."""
    write_markdown(posts_dir / "a.md", {"published": True})
    write_markdown(posts_dir / "b.md", {"published": None})
    write_markdown(posts_dir / "c.md", {"published": "false"})

    slugs = {p.slug for p in post_repository.list_published()}

    assert slugs == {"a", "b", "c"}


def test_posts_sorted_by_date_descending(posts_dir, post_repository):
    """Test newest-first ordering."""
    write_markdown(posts_dir / "old.md", {"date": "2022-05-01"})
    write_markdown(posts_dir / "new.md", {"date": "2024-03-10"})
    write_markdown(posts_dir / "mid.md", {"date": "2023-12-31"})

    posts = post_repository.list_published()

    assert [p.slug for p in posts] == ["new", "mid", "old"]
    for earlier, later in zip(posts, posts[1:]):
        assert earlier.date >= later.date


def test_same_date_ordered_by_slug(posts_dir, post_repository):
    """Test that ties on date are broken by slug."""
    for slug in ["charlie", "alpha", "bravo"]:
        write_markdown(posts_dir / f"{slug}.md", {"date": "2024-01-01"})

    assert [p.slug for p in post_repository.list_published()] == ["alpha", "bravo", "charlie"]


def test_undated_posts_sort_last(posts_dir, post_repository):
    """Test that posts without a date come after dated ones."""
    write_markdown(posts_dir / "undated.md", {"title": "No date"})
    write_markdown(posts_dir / "dated.md", {"date": "2020-01-01"})

    assert [p.slug for p in post_repository.list_published()] == ["dated", "undated"]


def test_yaml_dates_are_normalized(posts_dir, post_repository):
    """Test that unquoted YAML dates and timestamps become ISO strings."""
    (posts_dir / "unquoted.md").write_text("---\ndate: 2023-07-04\n---\nBody\n", encoding="utf-8")
    (posts_dir / "timestamp.md").write_text("---\ndate: 2023-07-05 10:30:00\n---\nBody\n", encoding="utf-8")

    assert post_repository.find_by_slug("unquoted").date == "2023-07-04"
    assert post_repository.find_by_slug("timestamp").date == "2023-07-05T10:30:00Z"


def test_non_iso_date_is_malformed(posts_dir, post_repository):
    """Test that dates which cannot be compared correctly are rejected."""
    write_markdown(posts_dir / "bad-date.md", {"date": "March 5th"})

    with pytest.raises(MalformedDocumentError, match="ISO date"):
        post_repository.list_published()


def test_wrong_field_type_is_malformed(posts_dir, post_repository):
    """Test that tags must be a list of strings."""
    write_markdown(posts_dir / "bad-tags.md", {"tags": {"nested": "mapping"}})

    with pytest.raises(MalformedDocumentError):
        post_repository.find_by_slug("bad-tags")


def test_missing_directory_returns_empty_list(tmp_path):
    """Test that a missing posts directory is not an error."""
    repository = PostRepository(tmp_path / "does-not-exist")

    assert repository.list_published() == []
    assert repository.list_tags() == []


def test_find_by_slug_missing(post_repository):
    """Test that a missing slug returns None."""
    assert post_repository.find_by_slug("missing-slug") is None


def test_find_by_slug_in_missing_directory(tmp_path):
    """Test lookups when the directory itself is missing."""
    assert PostRepository(tmp_path / "nope").find_by_slug("anything") is None


def test_find_by_slug_unreadable_file(posts_dir, post_repository):
    """Test that a file that is not UTF-8 text is treated as not found."""
    (posts_dir / "binary.md").write_bytes(b"\xff\xfe\x00\x81 not utf-8")

    assert post_repository.find_by_slug("binary") is None


def test_find_by_slug_rejects_traversal(posts_dir, post_repository):
    """Test that slugs cannot point outside the posts directory."""
    write_markdown(posts_dir.parent / "outside.md", {"title": "Outside"})

    assert post_repository.find_by_slug("../outside") is None


def test_markdown_extension_is_recognised(posts_dir, post_repository):
    """Test that .markdown files are loaded too."""
    write_markdown(posts_dir / "long-ext.markdown", {"title": "Long extension"})
    (posts_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    assert [p.slug for p in post_repository.list_published()] == ["long-ext"]
    assert post_repository.find_by_slug("long-ext").title == "Long extension"


def test_list_tags(posts_dir, post_repository):
    """Test sorted, unique tags from published posts only."""
    write_markdown(posts_dir / "a.md", {"tags": ["python", "web"]})
    write_markdown(posts_dir / "b.md", {"tags": ["api", "python"]})
    write_markdown(posts_dir / "c.md", {"tags": ["secret"], "published": False})

    assert post_repository.list_tags() == ["api", "python", "web"]


def test_listing_is_idempotent(posts_dir, post_repository):
    """Test that repeated listings of unchanged files are equal."""
    write_markdown(posts_dir / "one.md", {"title": "One", "date": "2024-01-01", "tags": ["x"]}, "Body one")
    write_markdown(posts_dir / "two.md", {"title": "Two", "date": "2024-01-02"}, "Body two")

    assert post_repository.list_published() == post_repository.list_published()


def test_listing_reflects_file_changes(posts_dir, post_repository):
    """Test that nothing is cached between calls."""
    write_markdown(posts_dir / "first.md", {"title": "First"})
    assert len(post_repository.list_published()) == 1

    write_markdown(posts_dir / "second.md", {"title": "Second"})
    assert len(post_repository.list_published()) == 2


def test_posts_are_immutable(posts_dir, post_repository):
    """Test that returned records cannot be modified."""
    write_markdown(posts_dir / "frozen.md", {"title": "Frozen"})
    post = post_repository.find_by_slug("frozen")

    with pytest.raises(Exception):
        post.title = "Changed"


def test_quoted_datetime_is_accepted(posts_dir, post_repository):
    """Test that quoted ISO date-times are kept with their time in UTC."""
    write_markdown(posts_dir / "utc.md", {"date": "2024-01-05T10:00:00Z"})
    write_markdown(posts_dir / "offset.md", {"date": "2024-01-05T12:30:00+02:00"})

    assert post_repository.find_by_slug("utc").date == "2024-01-05T10:00:00Z"
    assert post_repository.find_by_slug("offset").date == "2024-01-05T10:30:00Z"


def test_same_day_posts_ordered_by_time(posts_dir, post_repository):
    """Test that posts on the same day are newest first by time, not by slug."""
    write_markdown(posts_dir / "aaa-morning.md", {"date": "2024-01-05T08:00:00Z"})
    write_markdown(posts_dir / "zzz-evening.md", {"date": "2024-01-05T20:00:00Z"})
    write_markdown(posts_dir / "mmm-noon.md", {"date": "2024-01-05T14:00:00+02:00"})
    write_markdown(posts_dir / "day-only.md", {"date": "2024-01-05"})
    write_markdown(posts_dir / "next-day.md", {"date": "2024-01-06"})

    slugs = [p.slug for p in post_repository.list_published()]

    assert slugs == ["next-day", "zzz-evening", "mmm-noon", "aaa-morning", "day-only"]


def test_numeric_date_is_malformed(posts_dir, post_repository):
    """Test that a bare year is not accepted as a date."""
    write_markdown(posts_dir / "year.md", {"date": 2024})

    with pytest.raises(MalformedDocumentError, match="ISO date"):
        post_repository.find_by_slug("year")


def test_numeric_text_fields_read_as_text(posts_dir, post_repository):
    """Test that YAML numbers in title, excerpt and tags become strings."""
    write_markdown(posts_dir / "numbers.md", {"title": 1984, "excerpt": 3.5, "tags": ["python", 3]})

    post = post_repository.list_published()[0]

    assert post.title == "1984"
    assert post.excerpt == "3.5"
    assert post.tags == ["python", "3"]


def test_every_listed_post_is_fetchable(posts_dir, post_repository):
    """Test that listing and lookup agree on which files are posts."""
    write_markdown(posts_dir / "normal.md", {"title": "Normal"})
    write_markdown(posts_dir / "Upper.MD", {"title": "Upper"})
    write_markdown(posts_dir / ".hidden.md", {"title": "Hidden"})
    write_markdown(posts_dir / "both.md", {"title": "Short extension"})
    write_markdown(posts_dir / "both.markdown", {"title": "Long extension"})

    posts = post_repository.list_published()

    assert [p.slug for p in posts] == ["both", "normal"]
    for post in posts:
        assert post_repository.find_by_slug(post.slug) == post
