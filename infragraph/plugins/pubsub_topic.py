from typing import List

from infragraph.models import (
    ConfigurationBlock,
    FieldSpec,
    FieldType,
    Node,
    ResourceCategory,
    ResourceKind,
    ResourceSchema,
)
from infragraph.plugins.base import GeneratorContext, ResourcePlugin, ResourceProperties


class PubsubTopicProperties(ResourceProperties):
    name: str = ""
    message_retention_duration: str = "86600s"


class PubsubTopicPlugin(ResourcePlugin):
    kind = ResourceKind.PUBSUB_TOPIC
    category = ResourceCategory.MESSAGING
    display_name = "Pub/Sub Topic"
    description = "Messaging topic for asynchronous communication"
    icon = "📨"
    properties_model = PubsubTopicProperties

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Topic Name",
                required=True,
                default="",
                placeholder="my-events-topic",
                group="General",
            ),
            "message_retention_duration": FieldSpec(
                type=FieldType.STRING,
                label="Message Retention",
                default="86600s",
                placeholder="86600s",
                description="Duration to retain messages",
                group="Settings",
            ),
        }
    )

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: PubsubTopicProperties = self.properties(node)
        attrs = {"name": props.name or node.name}
        if props.message_retention_duration:
            attrs["message_retention_duration"] = props.message_retention_duration
        return [self.resource_block(node, ctx, attrs)]
