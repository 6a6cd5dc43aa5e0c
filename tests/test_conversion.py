"""Tests for content location, noise removal and Markdown rendering."""

from markscrape.conversion import (
    HtmlToMarkdown,
    MainContentExtractor,
    parse_html,
    postprocess_markdown,
)
from markscrape.conversion.extractor import NOISE_TAGS


def _tag_children(element):
    return [child for child in element.children if getattr(child, "name", None)]


class TestContentLocator:
    """Tests for main content selection."""

    def test_main_tag_wins_over_article(self):
        """Test that <main> has priority over <article>."""
        soup = parse_html(
            """<html><body>
                <article><p>Article text</p></article>
                <main><p>Main text</p></main>
            </body></html>"""
        )

        body = MainContentExtractor().locate(soup)

        assert "Main text" in body.get_text()
        assert "Article text" not in body.get_text()

    def test_id_main_content_before_article(self):
        """Test that #main-content beats a later <article> selector."""
        soup = parse_html(
            """<html><body>
                <article><p>Teaser</p></article>
                <div id="main-content"><p>Real content</p></div>
            </body></html>"""
        )

        body = MainContentExtractor().locate(soup)

        assert body.get_text().strip() == "Real content"

    def test_class_content_before_id_content(self):
        """Test the .content selector is tried before #content."""
        soup = parse_html(
            """<html><body>
                <div id="content"><p>By id</p></div>
                <div class="content"><p>By class</p></div>
            </body></html>"""
        )

        body = MainContentExtractor().locate(soup)

        assert "By class" in body.get_text()
        assert "By id" not in body.get_text()

    def test_first_match_wins_regardless_of_size(self):
        """Test that selection is existence-based, not scored."""
        soup = parse_html(
            """<html><body>
                <main></main>
                <article><p>A very long article body that would win on size.</p></article>
            </body></html>"""
        )

        body = MainContentExtractor().locate(soup)

        children = _tag_children(body)
        assert len(children) == 1
        assert children[0].name == "main"
        assert "long article" not in body.get_text()

    def test_chosen_element_becomes_sole_body_child(self):
        """Test that the chosen element replaces all other body content."""
        soup = parse_html(
            """<html><body>
                <div class="banner">Banner</div>
                <article><h1>Title</h1></article>
                <div>Trailing</div>
            </body></html>"""
        )

        body = MainContentExtractor().locate(soup)

        children = list(body.children)
        assert len(children) == 1
        assert children[0].name == "article"
        assert children[0].parent is body

    def test_falls_back_to_body(self):
        """Test fallback to body when no selector matches."""
        soup = parse_html("<html><body><div><p>Plain page</p></div></body></html>")

        body = MainContentExtractor().locate(soup)

        assert body is soup.body
        assert "Plain page" in body.get_text()

    def test_fragment_without_body_gets_one(self):
        """Test that a bare fragment is wrapped in a body."""
        soup = parse_html("<p>Fragment</p>")

        body = MainContentExtractor().locate(soup)

        assert body.name == "body"
        assert "Fragment" in body.get_text()

    def test_wrapper_class_on_body_is_ignored(self):
        """Test that a .content match on body itself keeps the body."""
        soup = parse_html('<html><body class="content"><p>Text</p></body></html>')

        body = MainContentExtractor().locate(soup)

        assert body is soup.body
        assert "Text" in body.get_text()


class TestNoiseFilter:
    """Tests for boilerplate removal."""

    def test_removes_noise_tags(self):
        """Test that every noise tag is removed."""
        soup = parse_html(
            """<html><body><div>
                <script>alert("bad")</script>
                <style>.bad { color: red; }</style>
                <noscript>Enable JS</noscript>
                <nav>Navigation</nav>
                <header>Header</header>
                <footer>Footer</footer>
                <form><input name="q"></form>
                <p>Good content</p>
            </div></body></html>"""
        )

        MainContentExtractor().remove_noise(soup.body)

        for name in NOISE_TAGS:
            assert soup.body.find(name) is None
        assert "Good content" in soup.body.get_text()
        assert "alert" not in soup.body.get_text()

    def test_removes_nested_noise_once(self):
        """Test that noise nested inside noise does not break removal."""
        soup = parse_html(
            """<html><body>
                <header><nav><form><script>x()</script></form></nav></header>
                <p>Kept</p>
            </body></html>"""
        )

        MainContentExtractor().remove_noise(soup.body)

        assert soup.body.find_all(True)[0].name == "p"
        assert soup.body.get_text().strip() == "Kept"

    def test_removes_denylisted_ids_and_classes(self):
        """Test case-insensitive substring matching on id and class."""
        soup = parse_html(
            """<html><body>
                <div id="Left-Sidebar">Sidebar</div>
                <div class="site COOKIES-banner">Cookies</div>
                <div class="newsletter-popup-wrapper">Popup</div>
                <ul class="dropdown-menu"><li>Item</li></ul>
                <div id="breadcrumbs">Home / Docs</div>
                <p class="lead">Lead paragraph</p>
            </body></html>"""
        )

        MainContentExtractor().remove_noise(soup.body)

        text = soup.body.get_text()
        assert "Sidebar" not in text
        assert "Cookies" not in text
        assert "Popup" not in text
        assert "Item" not in text
        assert "Home / Docs" not in text
        assert "Lead paragraph" in text

    def test_removes_denylisted_tag_names(self):
        """Test that custom element names are matched too."""
        soup = parse_html(
            """<html><body>
                <cookies-consent>Accept all</cookies-consent>
                <app-modal>Dialog</app-modal>
                <p>Body text</p>
            </body></html>"""
        )

        MainContentExtractor().remove_noise(soup.body)

        assert "Accept all" not in soup.body.get_text()
        assert "Dialog" not in soup.body.get_text()
        assert "Body text" in soup.body.get_text()

    def test_removes_comments(self):
        """Test that HTML comments are dropped."""
        soup = parse_html("<html><body><!-- tracking pixel --><p>Kept</p></body></html>")

        MainContentExtractor().remove_noise(soup.body)

        assert "tracking" not in str(soup.body)
        assert "Kept" in soup.body.get_text()

    def test_keeps_scope_root(self):
        """Test that the root itself is never removed."""
        soup = parse_html('<html><body class="has-modal-open"><p>Visible</p></body></html>')

        MainContentExtractor().remove_noise(soup.body)

        assert soup.body is not None
        assert "Visible" in soup.body.get_text()

    def test_extract_runs_locator_then_filter(self):
        """Test extraction from an article with boilerplate around and inside it."""
        soup = parse_html(
            """<html><body>
                <nav>Navigation</nav>
                <article>
                    <h1>Title</h1>
                    <div class="share-popup">Share</div>
                    <p>Content here</p>
                </article>
                <footer>Footer</footer>
            </body></html>"""
        )

        body = MainContentExtractor().extract(soup)

        text = body.get_text()
        assert "Title" in text
        assert "Content here" in text
        assert "Navigation" not in text
        assert "Footer" not in text
        assert "Share" not in text


class TestHtmlToMarkdown:
    """Tests for HtmlToMarkdown converter."""

    def test_converts_headings_atx(self):
        """Test ATX heading conversion."""
        result = HtmlToMarkdown().convert(parse_html("<h1>Title</h1><h2>Subtitle</h2>"))

        assert "# Title" in result
        assert "## Subtitle" in result
        assert "===" not in result

    def test_converts_lists_with_dash(self):
        """Test unordered lists use '-' bullets."""
        result = HtmlToMarkdown().convert(parse_html("<ul><li>Item 1</li><li>Item 2</li></ul>"))

        assert "- Item 1" in result
        assert "- Item 2" in result

    def test_converts_code_blocks_fenced(self):
        """Test code blocks are fenced."""
        html = "<pre><code>def hello():\n    print('Hello')</code></pre>"

        result = HtmlToMarkdown().convert(parse_html(html))

        assert "```" in result
        assert "def hello():" in result

    def test_converts_inline_code(self):
        """Test inline code conversion."""
        result = HtmlToMarkdown().convert(parse_html("<p>Use the <code>print()</code> function.</p>"))

        assert "`print()`" in result

    def test_converts_bold_and_italic(self):
        """Test bold and italic conversion."""
        result = HtmlToMarkdown().convert(parse_html("<p><strong>Bold</strong> and <em>italic</em> text.</p>"))

        assert "**Bold**" in result
        assert "*italic*" in result

    def test_converts_links(self):
        """Test link conversion."""
        html = '<p>See <a href="https://example.com/page">the   docs\n</a>.</p>'

        result = HtmlToMarkdown().convert(parse_html(html))

        assert "[the docs](https://example.com/page)" in result

    def test_drops_links_without_text(self):
        """Test that empty anchors produce no link syntax."""
        html = '<p>Before<a href="https://example.com/icon"> </a>After</p>'

        result = HtmlToMarkdown().convert(parse_html(html))

        assert "](" not in result
        assert "[]" not in result

    def test_strip_links_keeps_text(self):
        """Test that strip_links renders anchors as text."""
        html = '<p>See <a href="https://example.com/page">the docs</a>.</p>'

        result = HtmlToMarkdown(strip_links=True).convert(parse_html(html))

        assert "the docs" in result
        assert "[the docs](" not in result

    def test_anchor_without_href_is_text(self):
        """Test that an anchor with no href renders as text."""
        result = HtmlToMarkdown().convert(parse_html('<p><a name="top">Top</a></p>'))

        assert result == "Top"

    def test_converts_images_with_alt(self):
        """Test image conversion collapses alt whitespace."""
        html = '<p><img src="https://example.com/cat.png" alt="  A\n   cat "></p>'

        result = HtmlToMarkdown().convert(parse_html(html))

        assert "![A cat](https://example.com/cat.png)" in result

    def test_drops_images_without_alt(self):
        """Test that images without alt text never render."""
        html = '<p>Text<img src="https://example.com/a.png"><img src="b.png" alt="   "></p>'

        result = HtmlToMarkdown().convert(parse_html(html))

        assert "![" not in result
        assert "a.png" not in result
        assert "b.png" not in result

    def test_strip_images(self):
        """Test that strip_images drops every image."""
        html = '<p><img src="cat.png" alt="Cat"> and <img src="dog.png" alt="Dog"></p>'

        result = HtmlToMarkdown(strip_images=True).convert(parse_html(html))

        assert "![" not in result

    def test_cleans_excessive_whitespace(self):
        """Test that excessive blank lines are collapsed."""
        html = "<p>Text</p>\n\n\n\n\n<br><br><br><br><p>More text</p>"

        result = HtmlToMarkdown().convert(parse_html(html))

        assert "\n\n\n" not in result
        assert result.startswith("Text")
        assert result.endswith("More text")


class TestPostprocess:
    """Tests for the final Markdown cleanup."""

    def test_trims(self):
        """Test surrounding whitespace is trimmed."""
        assert postprocess_markdown("\n\n  # Title\n\n") == "# Title"

    def test_removes_escaped_brackets(self):
        """Test literal \\[ and \\] sequences are deleted."""
        assert postprocess_markdown("Note \\[1\\] here") == "Note 1 here"

    def test_collapses_newline_runs(self):
        """Test runs of 3+ newlines become exactly 2."""
        assert postprocess_markdown("a\n\n\nb\n\n\n\n\nc\n\nd") == "a\n\nb\n\nc\n\nd"

    def test_steps_run_in_order(self):
        """Test trimming happens before bracket removal and collapsing."""
        assert postprocess_markdown("  \\[\\]\n\n\n\ntext") == "\n\ntext"
