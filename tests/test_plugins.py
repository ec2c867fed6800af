"""Tests for dotlog.plugins — channel plugin lookup and construction."""

import pytest

from dotlog import plugins
from dotlog.channels import CallbackChannel, Channel, NullChannel
from dotlog.errors import InvalidPluginError, PluginError, UnknownPluginError
from dotlog.plugins import (
    build_channel, format_channel_list, get_channel_factory, known_channels,
    register_channel, register_channels, unregister_channel,
)


class ListChannel(Channel):
    """Collect messages into a list."""

    def __init__(self, limit=10):
        self.limit = limit
        self.items = []

    def log(self, message):
        self.items.append(message)


def not_a_channel():
    return object()


def collect(message):
    pass


@pytest.fixture
def scratch_plugin():
    """Register a temporary 'list' plugin and remove it afterwards."""
    register_channel("list", ListChannel)
    yield "list"
    unregister_channel("list")


class TestBuiltins:

    def test_builtins_registered(self):
        assert {"null", "callback"} <= set(known_channels())

    def test_null(self):
        assert isinstance(build_channel("null"), NullChannel)

    def test_callback_with_callable(self):
        chan = build_channel("callback", func=collect)
        assert isinstance(chan, CallbackChannel)
        assert chan.func is collect

    def test_callback_with_import_path(self):
        chan = build_channel("callback", func=f"{__name__}:collect")
        assert chan.func is collect

    def test_callback_with_non_callable(self):
        with pytest.raises(InvalidPluginError):
            build_channel("callback", func=42)


class TestRegistration:

    def test_register_and_build(self, scratch_plugin):
        chan = build_channel(scratch_plugin, limit=3)
        assert isinstance(chan, ListChannel)
        assert chan.limit == 3

    def test_description_from_docstring(self, scratch_plugin):
        text = format_channel_list()
        line = next(l for l in text.splitlines() if l.strip().startswith("list "))
        assert line.endswith("Collect messages into a list.")

    def test_register_non_callable(self):
        with pytest.raises(InvalidPluginError):
            register_channel("bad", "not callable")
        assert "bad" not in known_channels()

    def test_register_many(self):
        register_channels(one=NullChannel, two=ListChannel)
        try:
            assert {"one", "two"} <= set(known_channels())
        finally:
            unregister_channel("one")
            unregister_channel("two")

    def test_unregister_unknown_is_noop(self):
        unregister_channel("never-registered")


class TestResolution:

    def test_unknown_name(self):
        with pytest.raises(UnknownPluginError):
            get_channel_factory("nope")

    def test_unknown_is_lookup_error(self):
        with pytest.raises(LookupError):
            build_channel("nope")

    def test_import_path(self):
        factory = get_channel_factory(f"{__name__}:ListChannel")
        assert factory is ListChannel

    def test_import_path_bad_module(self):
        with pytest.raises(UnknownPluginError):
            get_channel_factory("no_such_module_xyz:Thing")

    def test_import_path_bad_attribute(self):
        with pytest.raises(UnknownPluginError):
            get_channel_factory("dotlog.channels:Missing")

    def test_import_path_not_callable(self):
        with pytest.raises(InvalidPluginError):
            get_channel_factory("dotlog.plugins:_CHANNELS")

    def test_rejected_options(self):
        with pytest.raises(InvalidPluginError):
            build_channel("null", colour="blue")

    def test_factory_returning_non_channel(self):
        with pytest.raises(InvalidPluginError):
            build_channel(f"{__name__}:not_a_channel")

    def test_invalid_is_type_error(self):
        with pytest.raises(TypeError):
            build_channel(f"{__name__}:not_a_channel")

    def test_error_family(self):
        assert issubclass(UnknownPluginError, PluginError)
        assert issubclass(InvalidPluginError, PluginError)


class TestFormatChannelList:

    def test_lists_builtins(self):
        text = format_channel_list()
        assert text.startswith("Available channel plugins:")
        assert "null" in text
        assert "Discard every message" in text

    def test_empty(self, monkeypatch):
        monkeypatch.setattr(plugins, "_CHANNELS", {})
        assert format_channel_list() == "Available channel plugins: (none)"
