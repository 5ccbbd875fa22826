"""Tests for PluginHost: resolution, ordering, conflicts and lifecycle."""

import asyncio
import sys

import pytest

from blogsite.errors import PluginActivationError, PluginConflictError, PluginResolutionError
from blogsite.models.site import SiteConfig
from blogsite.plugins.instance import PluginState
from blogsite.plugins.lifecycle import PluginLifecycle


def _config(site_dict, plugins):
    data = dict(site_dict)
    data["plugins"] = plugins
    return SiteConfig.from_dict(data)


class TestResolve:
    def test_resolves_in_declaration_order(self, site_config, make_host):
        """Activations resolve in the order the site declares them."""
        resolved = make_host(site_config).resolve_all()

        assert [p.id for p in resolved] == list(site_config.plugin_ids)
        assert [p.position for p in resolved] == [0, 1, 2, 3]
        assert all(p.source == "bundled" for p in resolved)

    def test_options_come_from_the_activation(self, site_config, make_host):
        """Each resolved plugin carries its own activation options."""
        resolved = make_host(site_config).resolve_all()

        assert resolved[0].options == {}
        assert resolved[1].options["contentPosts"] == "content/posts"
        assert resolved[2].options["short_name"] == "Novela"

    def test_unknown_plugin_is_fatal(self, site_dict, make_host):
        """An identifier with no discovered plugin stops resolution."""
        config = _config(site_dict, ["gatsby-plugin-sitemap", "gatsby-plugin-missing"])

        with pytest.raises(PluginResolutionError) as exc_info:
            make_host(config).resolve_all()
        assert exc_info.value.plugin_id == "gatsby-plugin-missing"

    def test_duplicate_activation_conflicts(self, site_dict, make_host):
        """Listing a plugin twice fails unless its manifest allows it."""
        config = _config(site_dict, ["gatsby-plugin-sitemap", "gatsby-plugin-sitemap"])

        with pytest.raises(PluginConflictError, match="more than once"):
            make_host(config).resolve_all()

    def test_duplicate_allowed_when_manifest_says_multiple(self, site_dict, make_host, write_plugin):
        """Plugins marked multiple get one independent instance per activation."""
        write_plugin("source-filesystem", multiple=True)
        config = _config(site_dict, [
            {"resolve": "source-filesystem", "options": {"path": "content/posts"}},
            {"resolve": "source-filesystem", "options": {"path": "content/authors"}},
        ])

        host = make_host(config)
        activations = host.activate_all()

        assert [a.options["path"] for a in activations] == ["content/posts", "content/authors"]
        assert activations[0] is not activations[1]
        assert host.discover()["source-filesystem"].state == PluginState.DISCOVERED

    def test_installed_plugin_resolves(self, site_dict, make_host, write_plugin):
        """Plugins in the installed dir resolve like bundled ones."""
        write_plugin("@acme/gatsby-theme-x")
        config = _config(site_dict, [{"resolve": "@acme/gatsby-theme-x", "options": {"a": 1}}])

        resolved = make_host(config).resolve_all()

        assert resolved[0].source == "installed"
        assert resolved[0].options == {"a": 1}


class TestActivate:
    def test_activates_shipped_config(self, site_config, make_host):
        """The shipped declaration activates all four plugins once."""
        host = make_host(site_config)
        activations = host.activate_all()

        assert len(activations) == 4
        assert all(a.state == PluginState.REGISTERED for a in activations)
        assert host.activate_all() is activations

    def test_plugin_api_carries_options_and_metadata(self, site_dict, make_host, write_plugin):
        """PluginAPI hands the plugin its options, site metadata and logger."""
        write_plugin("recorder")
        config = _config(site_dict, [{"resolve": "recorder", "options": {"k": "v"}}])

        host = make_host(config)
        host.activate_all()
        plugin = host.get_plugin("recorder")

        assert plugin.api.options == {"k": "v"}
        assert plugin.api.site_metadata.title == "John Tipper's blog"
        assert plugin.api.get_logger().name == "plugin.recorder"

    def test_register_failure_is_fatal(self, site_dict, make_host, write_plugin):
        """A plugin rejecting its options aborts activation."""
        write_plugin("picky", body="""
            def register(api):
                raise ValueError("unknown option 'colour'")
        """)
        config = _config(site_dict, ["picky"])

        with pytest.raises(PluginActivationError, match="colour"):
            make_host(config).activate_all()

    def test_missing_entry_function_is_fatal(self, site_dict, make_host, write_plugin):
        """An entry module without the entry function fails to load."""
        write_plugin("empty", body="VALUE = 1\n")
        config = _config(site_dict, ["empty"])

        with pytest.raises(PluginActivationError, match="no function 'register'"):
            make_host(config).activate_all()

    def test_invalid_theme_options_are_rejected_by_the_theme(self, site_dict, make_host):
        """The theme validates its own content paths."""
        config = _config(site_dict, [{
            "resolve": "@narative/gatsby-theme-novela",
            "options": {"contentPosts": "/abs/posts"},
        }])

        with pytest.raises(PluginActivationError, match="relative path"):
            make_host(config).activate_all()


class TestQueries:
    def test_list_plugins(self, site_config, make_host):
        """list_plugins is empty until activation, then follows declaration order."""
        host = make_host(site_config)
        assert host.list_plugins() == []

        host.activate_all()
        listed = host.list_plugins()

        assert [p["id"] for p in listed] == list(site_config.plugin_ids)
        assert listed[0]["summary"]["sitemap_url"] == "https://johntipper.org/sitemap.xml"

    def test_get_plugin_info(self, site_config, make_host):
        """get_plugin_info adds options; unknown ids give None."""
        host = make_host(site_config)
        host.activate_all()

        info = host.get_plugin_info("gatsby-plugin-manifest")

        assert info["position"] == 2
        assert info["options"]["display"] == "standalone"
        assert host.get_plugin_info("gatsby-plugin-missing") is None
        assert host.get_plugin("gatsby-plugin-missing") is None


class TestLifecycle:
    def test_start_and_stop_all(self, site_config, make_host):
        """start_all and stop_all move every plugin through STARTED to STOPPED."""
        host = make_host(site_config)

        asyncio.run(host.start_all())
        assert all(a.state == PluginState.STARTED for a in host.activations)

        asyncio.run(host.stop_all())
        assert all(a.state == PluginState.STOPPED for a in host.activations)

    def test_stop_order_is_reversed(self, site_dict, make_host, write_plugin, monkeypatch):
        """Plugins stop in reverse declaration order."""
        write_plugin("first")
        write_plugin("second")
        host = make_host(_config(site_dict, ["first", "second"]))

        stopped = []
        original_stop = host.lifecycle.stop

        async def recording_stop(instance):
            stopped.append(instance.id)
            return await original_stop(instance)

        monkeypatch.setattr(host.lifecycle, "stop", recording_stop)

        asyncio.run(host.start_all())
        asyncio.run(host.stop_all())

        assert stopped == ["second", "first"]

    def test_start_failure_is_fatal(self, site_dict, make_host, write_plugin):
        """An on_start error aborts start_all and marks the plugin ERROR."""
        write_plugin("flaky", body="""
            class Plugin:
                async def on_start(self):
                    raise RuntimeError("port in use")


            def register(api):
                return Plugin()
        """)
        host = make_host(_config(site_dict, ["flaky"]))

        with pytest.raises(PluginActivationError, match="port in use"):
            asyncio.run(host.start_all())
        assert host.activations[0].state == PluginState.ERROR

    def test_stop_failure_is_recorded(self, site_dict, make_host, write_plugin):
        """An on_stop error is recorded on the plugin without raising."""
        write_plugin("sticky", body="""
            class Plugin:
                async def on_stop(self):
                    raise RuntimeError("still flushing")


            def register(api):
                return Plugin()
        """)
        host = make_host(_config(site_dict, ["sticky"]))

        asyncio.run(host.start_all())
        asyncio.run(host.stop_all())

        assert host.activations[0].state == PluginState.STARTED
        assert host.activations[0].error == "still flushing"


class TestPluginLoading:
    def test_plugin_dir_is_removed_from_sys_path(self, site_dict, make_host, write_plugin):
        """A plugin directory added for loading is taken off sys.path afterwards."""
        plugin_dir = write_plugin("loader")
        make_host(_config(site_dict, ["loader"])).activate_all()

        assert str(plugin_dir) not in sys.path

    def test_existing_sys_path_entry_survives(self, site_dict, make_host, write_plugin, monkeypatch):
        """A plugin directory already on sys.path stays there after loading."""
        plugin_dir = write_plugin("preinstalled")
        monkeypatch.syspath_prepend(str(plugin_dir))

        make_host(_config(site_dict, ["preinstalled"])).activate_all()

        assert str(plugin_dir) in sys.path

    def test_plugin_can_import_sibling_modules(self, site_dict, make_host, write_plugin):
        """The entry module can import helpers from its own directory."""
        plugin_dir = write_plugin("with-helper", body="""
            from helper_for_with_helper import GREETING


            def register(api):
                return GREETING
        """)
        (plugin_dir / "helper_for_with_helper.py").write_text('GREETING = "hi"\n', encoding="utf-8")

        host = make_host(_config(site_dict, ["with-helper"]))
        host.activate_all()

        assert host.get_plugin("with-helper") == "hi"

    def test_steps_out_of_order_are_refused(self, site_config, make_host):
        """Lifecycle steps only run from the state that precedes them."""
        instance = make_host(site_config).resolve_all()[0]
        lifecycle = PluginLifecycle()

        assert not asyncio.run(lifecycle.start(instance))
        assert instance.state == PluginState.DISCOVERED
        assert lifecycle.load(instance)
        assert not lifecycle.load(instance)
        assert instance.state == PluginState.LOADED


class TestShadowing:
    def test_host_reports_shadowed_plugins(self, site_config, make_host, write_plugin):
        """A duplicate in the installed dir is reported and the bundled copy is used."""
        shadow_dir = write_plugin("gatsby-plugin-sitemap", dirname="shadow")
        host = make_host(site_config)

        host.activate_all()

        assert [p.path for p in host.shadowed] == [shadow_dir]
        assert host.get_plugin_info("gatsby-plugin-sitemap")["source"] == "bundled"

    def test_no_shadowed_plugins_by_default(self, site_config, make_host):
        """The bundled set alone shadows nothing."""
        assert make_host(site_config).shadowed == []
