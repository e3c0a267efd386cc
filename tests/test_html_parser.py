# File: tests/test_html_parser.py
"""Signal extraction: fields, bounds and tolerance to broken markup."""
import pytest

from page_roast.models import SignalBundle
from page_roast.parser.html_parser import MAX_BODY_CHARS, MAX_CTAS, extract_signals

URL = "https://acme.test/"


def assert_clean(bundle: SignalBundle) -> None:
    fields = [bundle.title, bundle.body_text, *bundle.headings, *bundle.ctas]
    for value in fields:
        assert "<" not in value and ">" not in value
        assert "  " not in value
        assert "\n" not in value and "\t" not in value
    assert len(bundle.body_text) <= MAX_BODY_CHARS
    assert len(bundle.ctas) <= MAX_CTAS


def test_minimal_page():
    bundle = extract_signals("<title>Acme</title><h1>Grow Fast</h1><button>Sign Up</button>", URL)
    assert bundle.url == URL
    assert bundle.title == "Acme"
    assert bundle.headings == ("Grow Fast",)
    assert bundle.ctas == ("Sign Up",)


def test_landing_page(landing_html):
    bundle = extract_signals(landing_html, URL)
    assert bundle.title == "Acme Analytics"
    # nested <span> contributes its text; the fake <h1> inside <script> is not a tag
    assert bundle.headings == ("Grow Fast",)
    assert bundle.ctas == ("Start free trial", "Book a demo")
    assert "Analytics for teams that ship." in bundle.body_text
    assert "window.tracking" not in bundle.body_text
    assert "color: red" not in bundle.body_text
    assert_clean(bundle)


def test_first_title_wins():
    bundle = extract_signals("<title>One</title><title>Two</title>", URL)
    assert bundle.title == "One"


def test_tags_are_case_insensitive():
    html = "<TITLE>Shout</TITLE><H1>Big  News</H1><BUTTON>Go</BUTTON><A CLASS='BigBtn btn'>Buy</A>"
    bundle = extract_signals(html, URL)
    assert bundle.title == "Shout"
    assert bundle.headings == ("Big News",)
    assert bundle.ctas == ("Go", "Buy")


def test_ctas_in_document_order_and_filtered():
    html = (
        '<a class="nav" href="/">Home</a>'
        '<a class="cta-btn" href="/a">First</a>'
        "<button>  </button>"
        "<button>Second</button>"
        '<a class="button" href="/b">Not a btn class</a>'
        '<a class="btn-lg" href="/c"><b>Third</b> one</a>'
    )
    bundle = extract_signals(html, URL)
    assert bundle.ctas == ("First", "Second", "Third one")


def test_ctas_capped_at_ten():
    html = "".join(f"<button>Action {i}</button>" for i in range(25))
    bundle = extract_signals(html, URL)
    assert len(bundle.ctas) == MAX_CTAS
    assert bundle.ctas[0] == "Action 0"
    assert bundle.ctas[-1] == "Action 9"


def test_empty_headings_dropped():
    bundle = extract_signals("<h1> </h1><h1><img src='x.png'></h1><h1>Real</h1>", URL)
    assert bundle.headings == ("Real",)
    assert bundle.headings_text == "Real"


def test_headings_joined_for_presentation():
    bundle = extract_signals("<h1>One</h1><p>x</p><h1>Two</h1>", URL)
    assert bundle.headings_text == "One, Two"


def test_body_text_capped():
    html = "<p>" + "word " * 5000 + "</p>"
    bundle = extract_signals(html, URL)
    assert len(bundle.body_text) <= MAX_BODY_CHARS
    assert bundle.body_text.startswith("word word")
    assert_clean(bundle)


def test_multiline_script_and_style_removed():
    html = """
    <SCRIPT type="text/javascript">
      var x = 1;
      if (x < 2) { document.write("<p>injected</p>"); }
    </SCRIPT>
    <style media="screen">
      .a > .b { display: none; }
    </style>
    <p>Visible</p>
    """
    bundle = extract_signals(html, URL)
    assert bundle.body_text == "Visible"


def test_entities_do_not_leak_angle_brackets():
    bundle = extract_signals("<h1>&lt;b&gt;Bold&lt;/b&gt;</h1><p>1 &lt; 2</p>", URL)
    assert_clean(bundle)
    assert bundle.headings == ("b Bold /b",)


@pytest.mark.parametrize(
    "html",
    [
        "",
        "plain text, no markup",
        "<h1>Unclosed heading",
        "<button>Never closed<div><a class='btn'>",
        "<<<>>><title></title><h1></h1>",
        "<![if !IE]><p>conditional</p><![endif]>",
        "</p></div></html>",
        "<title>",
    ],
)
def test_malformed_markup_never_raises(html):
    bundle = extract_signals(html, URL)
    assert isinstance(bundle, SignalBundle)
    assert_clean(bundle)


def test_extraction_is_idempotent(landing_html):
    assert extract_signals(landing_html, URL) == extract_signals(landing_html, URL)


def test_bundle_is_immutable():
    bundle = extract_signals("<title>Acme</title>", URL)
    with pytest.raises(AttributeError):
        bundle.title = "Other"  # type: ignore[misc]


def test_rejected_marked_section_keeps_other_signals():
    html = "<title>Acme</title><h1>Grow Fast</h1><button>Sign Up</button><p>Pricing <![b] soon</p>"
    bundle = extract_signals(html, URL)
    assert bundle.title == "Acme"
    assert bundle.headings == ("Grow Fast",)
    assert bundle.ctas == ("Sign Up",)
    assert "Pricing" in bundle.body_text
    assert_clean(bundle)


def test_nested_cta_counted_once():
    html = '<a class="btn" href="/go"><button>Go</button></a><button>Next</button>'
    assert extract_signals(html, URL).ctas == ("Go", "Next")
