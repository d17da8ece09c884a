import pytest

from infragraph.exceptions import PluginRegistrationError
from infragraph.models import CATEGORY_ORDER, ResourceCategory, ResourceKind
from infragraph.plugins import BUILTIN_PLUGINS, ComputeNetworkPlugin, ComputeSubnetworkPlugin
from infragraph.registry import PluginRegistry, build_default_registry


class TestPluginRegistry:
    def test_default_registry_covers_every_kind(self):
        registry = build_default_registry()
        assert len(registry) == len(ResourceKind)
        for kind in ResourceKind:
            assert kind in registry

    def test_get_accepts_enum_and_string(self):
        registry = build_default_registry()
        by_enum = registry.get(ResourceKind.COMPUTE_NETWORK)
        by_str = registry.get("google_compute_network")
        assert by_enum is by_str
        assert isinstance(by_enum, ComputeNetworkPlugin)

    def test_get_unknown_returns_none(self):
        registry = build_default_registry()
        assert registry.get("aws_instance") is None
        assert "aws_instance" not in registry

    def test_list_preserves_registration_order(self):
        registry = build_default_registry()
        assert [type(p) for p in registry.list()] == BUILTIN_PLUGINS

    def test_list_by_category_in_display_order(self):
        registry = build_default_registry()
        grouped = registry.list_by_category()
        assert list(grouped.keys()) == CATEGORY_ORDER
        network_kinds = [p.kind for p in grouped[ResourceCategory.NETWORK]]
        assert network_kinds[:2] == [
            ResourceKind.COMPUTE_NETWORK,
            ResourceKind.COMPUTE_SUBNETWORK,
        ]

    def test_empty_categories_are_omitted(self):
        registry = PluginRegistry([ComputeNetworkPlugin()])
        assert list(registry.list_by_category().keys()) == [ResourceCategory.NETWORK]

    def test_duplicate_kind_is_fatal(self):
        with pytest.raises(PluginRegistrationError, match="already registered"):
            PluginRegistry([ComputeNetworkPlugin(), ComputeNetworkPlugin()])

    def test_missing_kind_is_fatal_when_required(self):
        with pytest.raises(PluginRegistrationError, match="No plugin registered") as exc_info:
            PluginRegistry([ComputeNetworkPlugin(), ComputeSubnetworkPlugin()], require_all=True)
        assert exc_info.value.kind == ResourceKind.COMPUTE_INSTANCE.value

    def test_partial_registry_allowed_by_default(self):
        registry = PluginRegistry([ComputeSubnetworkPlugin()])
        assert registry.kinds() == [ResourceKind.COMPUTE_SUBNETWORK]
