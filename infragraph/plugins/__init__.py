"""Built-in resource plugins.

``BUILTIN_PLUGINS`` lists one class per resource kind in registration order,
which is also the category display order.
"""

from infragraph.plugins.base import (
    GeneratorContext,
    ResourcePlugin,
    ResourceProperties,
    ValidationContext,
)
from infragraph.plugins.cloud_run_service import CloudRunServicePlugin
from infragraph.plugins.compute_address import ComputeAddressPlugin
from infragraph.plugins.compute_firewall import ComputeFirewallPlugin
from infragraph.plugins.compute_instance import ComputeInstancePlugin
from infragraph.plugins.compute_network import ComputeNetworkPlugin
from infragraph.plugins.compute_subnetwork import ComputeSubnetworkPlugin
from infragraph.plugins.container_cluster import ContainerClusterPlugin
from infragraph.plugins.dns_managed_zone import DnsManagedZonePlugin
from infragraph.plugins.pubsub_topic import PubsubTopicPlugin
from infragraph.plugins.service_account import ServiceAccountPlugin
from infragraph.plugins.sql_database_instance import SqlDatabaseInstancePlugin
from infragraph.plugins.storage_bucket import StorageBucketPlugin

BUILTIN_PLUGINS = [
    # Network
    ComputeNetworkPlugin,
    ComputeSubnetworkPlugin,
    ComputeFirewallPlugin,
    ComputeAddressPlugin,
    DnsManagedZonePlugin,
    # Compute
    ComputeInstancePlugin,
    # Storage
    StorageBucketPlugin,
    # Kubernetes
    ContainerClusterPlugin,
    # Database
    SqlDatabaseInstancePlugin,
    # Serverless
    CloudRunServicePlugin,
    # Security
    ServiceAccountPlugin,
    # Messaging
    PubsubTopicPlugin,
]

__all__ = [
    "BUILTIN_PLUGINS",
    "GeneratorContext",
    "ResourcePlugin",
    "ResourceProperties",
    "ValidationContext",
    "CloudRunServicePlugin",
    "ComputeAddressPlugin",
    "ComputeFirewallPlugin",
    "ComputeInstancePlugin",
    "ComputeNetworkPlugin",
    "ComputeSubnetworkPlugin",
    "ContainerClusterPlugin",
    "DnsManagedZonePlugin",
    "PubsubTopicPlugin",
    "ServiceAccountPlugin",
    "SqlDatabaseInstancePlugin",
    "StorageBucketPlugin",
]
