"""
Unit tests for the start-up Banner and BannerBuilder.
"""

import io

import pytest

from httpbanner.banner import Banner, BannerBuilder, with_scheme
from httpbanner.core.errors import IncompleteConfiguration, InvalidGlyph
from httpbanner.request_banner import RequestBanner


def content_rows(text):
    """Rows holding a labeled line (borders and blank rows removed)."""
    return [row for row in text.split("\n") if ":" in row]


class TestWithScheme:
    """Test cases for scheme prefixing."""

    def test_adds_scheme(self):
        """Test a bare host gets the scheme."""
        assert with_scheme("banner.local", "http") == "http://banner.local"

    def test_keeps_existing_scheme(self):
        """Test an address with http(s) is unchanged."""
        assert with_scheme("http://banner.test", "https") == "http://banner.test"
        assert with_scheme("HTTPS://banner.test", "http") == "HTTPS://banner.test"


class TestBannerBuilder:
    """Test cases for BannerBuilder."""

    def test_build_incomplete(self, runtime_facts):
        """Test build reports missing fields instead of raising."""
        result = BannerBuilder(name="app", runtime=runtime_facts).build()
        assert result.complete is False
        assert result.missing == ["local", "public"]

    def test_empty_string_counts_as_missing(self, runtime_facts):
        """Test empty strings are treated as missing."""
        builder = BannerBuilder(name="", local="a", public="b", runtime=runtime_facts)
        assert builder.missing_fields() == ["name"]

    def test_build_complete(self, runtime_facts):
        """Test build returns the text once complete."""
        builder = BannerBuilder(
            name="app", local="a", public="b", runtime=runtime_facts
        )
        result = builder.build()
        assert result.complete is True
        assert "Starting up: app" in result.text

    def test_local_address_with_port(self, runtime_facts):
        """Test the port is appended to the local address."""
        builder = BannerBuilder(local="banner.local", local_port=8921, runtime=runtime_facts)
        assert builder.local_address() == "http://banner.local:8921"

    def test_ip_line_only_when_set(self, runtime_facts):
        """Test the ip line is skipped unless an ip is given."""
        builder = BannerBuilder(name="app", local="a", public="b", runtime=runtime_facts)
        assert " ip: " not in builder.build().text
        builder.ip = "10.0.0.5"
        assert "ip: 10.0.0.5" in builder.build().text


class TestBannerConstruction:
    """Test cases for Banner construction."""

    def test_no_config(self, runtime_facts):
        """Test a banner without config has no text."""
        banner = Banner(runtime=runtime_facts)
        assert isinstance(banner, Banner)
        assert banner.banner_text is None

    def test_config_composes_eagerly(self, banner_config, runtime_facts):
        """Test a complete config composes in the constructor."""
        banner = Banner(banner_config, runtime=runtime_facts)
        assert isinstance(banner.banner_text, str)
        assert len(banner.banner_text) > 0

    def test_partial_config_does_not_compose(self, runtime_facts):
        """Test a partial config leaves the text unset."""
        banner = Banner({"name": "app", "local": "a"}, runtime=runtime_facts)
        assert banner.banner_text is None

    def test_invalid_glyph_in_config(self, banner_config, runtime_facts):
        """Test an invalid glyph in the config is rejected."""
        banner_config["border_glyph"] = "##"
        with pytest.raises(ValueError):
            Banner(banner_config, runtime=runtime_facts)

    def test_detects_runtime_by_default(self, banner_config):
        """Test runtime facts are detected when not injected."""
        banner = Banner(banner_config)
        assert "process:" in banner.banner_text

    def test_camel_case_config_keys(self, runtime_facts):
        """Test localPort and borderGlyph keys are honoured."""
        banner = Banner(
            {
                "name": "Banner Test #1",
                "public": "https://banner.test",
                "local": "http://banner.local",
                "localPort": 8921,
                "borderGlyph": "%",
            },
            runtime=runtime_facts,
        )
        rows = banner.banner_text.split("\n")
        assert "http://banner.local:8921" in banner.banner_text
        assert set(rows[0]) == {"%"}
        assert set(rows[-1]) == {"%"}
        assert all(row.startswith("% ") or set(row) == {"%"} for row in rows)


class TestBannerCompose:
    """Test cases for Banner composition."""

    def test_scenario_lines(self, banner_config, runtime_facts):
        """Test the rendered lines of a complete banner."""
        text = Banner(banner_config, runtime=runtime_facts).compose()
        rows = content_rows(text)
        assert "Starting up: Banner Test #1" in rows[0]
        assert "banner.local" in rows[1] and "8921" in rows[1]
        assert "public: https://banner.test" in rows[2]
        assert "arch: x86_64 linux" in rows[3]
        assert "process: cpython 3.12.1" in rows[4]

    def test_delimiters_aligned(self, banner_config, runtime_facts):
        """Test all label delimiters share one column."""
        text = Banner(banner_config, runtime=runtime_facts).compose()
        assert len({row.index(":") for row in content_rows(text)}) == 1

    def test_all_rows_same_width(self, banner_config, runtime_facts):
        """Test every row of the box has the same width."""
        text = Banner(banner_config, runtime=runtime_facts).compose()
        assert len({len(row) for row in text.split("\n")}) == 1

    def test_header_and_footer_rows(self, banner_config, runtime_facts):
        """Test blank rows inside the top and bottom borders."""
        rows = Banner(banner_config, runtime=runtime_facts).compose().split("\n")
        assert set(rows[0]) == {"#"}
        assert rows[1].strip("#").strip() == ""
        assert rows[-2].strip("#").strip() == ""

    def test_compose_idempotent(self, banner_config, runtime_facts):
        """Test composing twice yields identical text."""
        banner = Banner(banner_config, runtime=runtime_facts)
        assert banner.compose() == banner.compose()

    def test_compose_incomplete_raises(self, runtime_facts):
        """Test compose raises IncompleteConfiguration naming the missing fields."""
        banner = Banner(runtime=runtime_facts)
        banner.name = "app"
        with pytest.raises(IncompleteConfiguration) as exc_info:
            banner.compose()
        assert exc_info.value.missing == ["local", "public"]

    def test_failed_compose_keeps_previous_text(self, banner_config, runtime_facts):
        """Test a failed compose leaves the stored text untouched."""
        banner = Banner(banner_config, runtime=runtime_facts)
        before = banner.banner_text
        banner.public = None
        with pytest.raises(IncompleteConfiguration):
            banner.compose()
        assert banner.banner_text == before

    def test_schemes_added(self, runtime_facts):
        """Test schemeless addresses get http:// and https://."""
        banner = Banner(
            {"name": "app", "local": "banner.local", "public": "banner.test"},
            runtime=runtime_facts,
        )
        assert "local: http://banner.local" in banner.banner_text
        assert "public: https://banner.test" in banner.banner_text

    def test_schemes_kept(self, runtime_facts):
        """Test addresses with a scheme are unchanged."""
        banner = Banner(
            {"name": "app", "local": "https://l.test", "public": "http://p.test"},
            runtime=runtime_facts,
        )
        assert "local: https://l.test" in banner.banner_text
        assert "public: http://p.test" in banner.banner_text


class TestBannerSetters:
    """Test cases for Banner setters."""

    def test_setters_compose_when_complete(self, runtime_facts):
        """Test the banner composes once the last required field is set."""
        banner = Banner(runtime=runtime_facts)
        banner.local = "banner.local"
        banner.public = "banner.test"
        assert banner.banner_text is None
        banner.name = "app"
        assert "Starting up: app" in banner.banner_text

    def test_setter_order_independent(self, runtime_facts):
        """Test setter order does not change the result."""
        first = Banner(runtime=runtime_facts)
        first.local = "banner.local"
        first.public = "banner.test"
        first.name = "app"

        second = Banner(runtime=runtime_facts)
        second.name = "app"
        second.public = "banner.test"
        second.local = "banner.local"

        assert first.banner_text == second.banner_text

    def test_local_port_setter(self, runtime_facts):
        """Test setting the port recomposes with the port appended once."""
        banner = Banner(
            {"name": "app", "local": "banner.local", "public": "p"},
            runtime=runtime_facts,
        )
        banner.local_port = 8921
        banner.local_port = 8922
        assert "http://banner.local:8922" in banner.banner_text
        assert "8921" not in banner.banner_text

    def test_border_glyph_setter(self, banner_config, runtime_facts):
        """Test changing the glyph redraws the border."""
        banner = Banner(banner_config, runtime=runtime_facts)
        banner.border_glyph = "="
        assert set(banner.banner_text.split("\n")[0]) == {"="}

    def test_border_glyph_setter_rejects_invalid(self, banner_config, runtime_facts):
        """Test an invalid glyph is rejected and the banner is unchanged."""
        banner = Banner(banner_config, runtime=runtime_facts)
        before = banner.banner_text
        with pytest.raises(InvalidGlyph):
            banner.border_glyph = "=="
        assert banner.border_glyph == "#"
        assert banner.banner_text == before

    def test_label_override(self, banner_config, runtime_facts):
        """Test a label override recomposes the banner."""
        banner = Banner(banner_config, runtime=runtime_facts)
        banner.process_label = "python"
        assert "python: cpython 3.12.1" in banner.banner_text
        assert "process:" not in banner.banner_text


class TestBannerPrint:
    """Test cases for Banner.print."""

    def test_print_without_text(self, runtime_facts):
        """Test print returns False before composition."""
        assert Banner(runtime=runtime_facts).print() is False

    def test_print_to_stdout(self, banner_config, runtime_facts, capsys):
        """Test print writes the banner to stdout."""
        banner = Banner(banner_config, runtime=runtime_facts)
        assert banner.print() is True
        assert banner.banner_text in capsys.readouterr().out

    def test_print_to_file(self, banner_config, runtime_facts):
        """Test print writes to the given stream."""
        banner = Banner(banner_config, runtime=runtime_facts)
        stream = io.StringIO()
        banner.print(file=stream)
        assert stream.getvalue() == banner.banner_text + "\n"


class TestCreateRequestHandler:
    """Test cases for Banner.create_request_handler."""

    def test_returns_request_banner(self, runtime_facts):
        """Test a RequestBanner is returned."""
        handler = Banner(runtime=runtime_facts).create_request_handler()
        assert isinstance(handler, RequestBanner)

    def test_use_alias(self, runtime_facts):
        """Test use is an alias of create_request_handler."""
        assert isinstance(Banner(runtime=runtime_facts).use(), RequestBanner)

    def test_get_glyph_from_border_glyph(self, banner_config, runtime_facts):
        """Test the GET glyph is the banner border glyph."""
        banner_config["border_glyph"] = "%"
        handler = Banner(banner_config, runtime=runtime_facts).create_request_handler()
        assert handler.glyphs.get == "%"
        assert handler.glyphs.post == "@"

    def test_glyphs_captured_at_creation(self, runtime_facts):
        """Test later glyph changes do not affect existing handlers."""
        banner = Banner(runtime=runtime_facts)
        handler = banner.create_request_handler()
        banner.border_glyph = "="
        assert handler.glyphs.get == "#"
        assert banner.create_request_handler().glyphs.get == "="

    def test_log_passed_through(self, runtime_facts):
        """Test the log sink is given to the handler."""
        sink = []
        handler = Banner(runtime=runtime_facts).create_request_handler(log=sink.append)
        assert handler.log == sink.append
