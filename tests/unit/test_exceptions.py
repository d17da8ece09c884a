from infragraph.exceptions import (
    ConfigValidationError,
    DependencyError,
    GraphEditError,
    InfragraphException,
    PluginRegistrationError,
)


def test_hierarchy():
    for exc_class in (ConfigValidationError, DependencyError, GraphEditError, PluginRegistrationError):
        assert issubclass(exc_class, InfragraphException)


def test_config_validation_error_location():
    error = ConfigValidationError("bad value", file="project.yaml", line=7)
    text = str(error)
    assert "File: project.yaml" in text
    assert "Line: 7" in text
    assert "Error: bad value" in text


def test_dependency_error_formats_cycle():
    error = DependencyError("Cannot create execution layers", cycle=["a", "b", "a"])
    assert "Cycle detected: a → b → a" in str(error)
    assert error.cycle == ["a", "b", "a"]


def test_graph_edit_error_context():
    error = GraphEditError("Edge already exists", edge_id="edge_1")
    assert "Edge: edge_1" in str(error)
    assert "Node:" not in str(error)


def test_plugin_registration_error_kind():
    error = PluginRegistrationError("duplicate", kind="google_pubsub_topic")
    assert "Kind: google_pubsub_topic" in str(error)
