"""Tests for ExecutionInput values and copy-on-transform behaviour."""

import logging
from types import MappingProxyType

import pytest
from pydantic import ValidationError

from queryflow.dataloader import DataLoaderRegistry
from queryflow.execution import ExecutionInput, ExecutionInputBuilder
from queryflow.settings import _reload_settings


HERO_QUERY = "{ hero { name } }"


class RequestContext:
    """Opaque caller-owned context object."""

    def __init__(self, user: str):
        self.user = user


@pytest.fixture
def execution_input():
    return (
        ExecutionInput.new_execution_input("query Hero($id: ID!) { hero(id: $id) { name } }")
        .operation_name("Hero")
        .context(RequestContext("luke"))
        .root({"universe": "star-wars"})
        .variables({"id": 42})
        .build()
    )


class TestExecutionInputDefaults:
    """Values of an input built without staging anything."""

    def test_empty_builder_defaults(self):
        execution_input = ExecutionInputBuilder().build()

        assert execution_input.query is None
        assert execution_input.operation_name is None
        assert execution_input.context is None
        assert execution_input.root is None
        assert execution_input.variables == {}
        assert execution_input.validate_query is True
        assert isinstance(execution_input.data_loader_registry, DataLoaderRegistry)

    def test_default_variables_are_read_only(self):
        execution_input = ExecutionInputBuilder().build()

        assert isinstance(execution_input.variables, MappingProxyType)
        with pytest.raises(TypeError):
            execution_input.variables["id"] = 1  # type: ignore[index]

    def test_each_builder_allocates_its_own_registry(self):
        first = ExecutionInputBuilder().build()
        second = ExecutionInputBuilder().build()

        assert first.data_loader_registry is not second.data_loader_registry

    def test_hero_scenario(self):
        execution_input = (
            ExecutionInput.new_execution_input()
            .query(HERO_QUERY)
            .operation_name(None)
            .variables({})
            .build()
        )

        assert execution_input.query == HERO_QUERY
        assert execution_input.operation_name is None
        assert execution_input.variables == {}
        assert execution_input.validate_query is True
        assert execution_input.data_loader_registry is not None

    def test_direct_construction_uses_defaults(self):
        execution_input = ExecutionInput(query=HERO_QUERY)

        assert execution_input.variables == {}
        assert execution_input.validate_query is True
        assert isinstance(execution_input.data_loader_registry, DataLoaderRegistry)

    def test_direct_construction_rejects_foreign_registry(self):
        with pytest.raises(ValidationError):
            ExecutionInput(query=HERO_QUERY, data_loader_registry={"not": "a registry"})

    def test_of_builds_with_fresh_registry(self):
        context = RequestContext("leia")
        variables = {"episode": "JEDI"}

        execution_input = ExecutionInput.of(HERO_QUERY, "Hero", context, None, variables, validate=False)

        assert execution_input.query == HERO_QUERY
        assert execution_input.operation_name == "Hero"
        assert execution_input.context is context
        assert execution_input.variables is variables
        assert execution_input.validate_query is False
        assert len(execution_input.data_loader_registry) == 0

    def test_of_without_variables_uses_empty_mapping(self):
        execution_input = ExecutionInput.of(HERO_QUERY)

        assert execution_input.variables == {}
        assert execution_input.validate_query is True


class TestExecutionInputImmutability:
    """ExecutionInput exposes no way to change a built value."""

    def test_assignment_is_rejected(self, execution_input):
        with pytest.raises(ValidationError):
            execution_input.query = "{ villain { name } }"

        assert execution_input.query.startswith("query Hero")

    def test_registry_assignment_is_rejected(self, execution_input):
        with pytest.raises(ValidationError):
            execution_input.data_loader_registry = DataLoaderRegistry()


class TestExecutionInputTransform:
    """Deriving new inputs through transform."""

    def test_noop_transform_shares_every_field(self, execution_input):
        transformed = execution_input.transform(lambda builder: None)

        assert transformed is not execution_input
        assert transformed.context is execution_input.context
        assert transformed.root is execution_input.root
        assert transformed.variables is execution_input.variables
        assert transformed.data_loader_registry is execution_input.data_loader_registry
        assert transformed.query == execution_input.query
        assert transformed.operation_name == execution_input.operation_name
        assert transformed.validate_query == execution_input.validate_query
        assert transformed == execution_input

    def test_transform_does_not_mutate_receiver(self, execution_input):
        before = {
            "query": execution_input.query,
            "operation_name": execution_input.operation_name,
            "context": execution_input.context,
            "root": execution_input.root,
            "variables": execution_input.variables,
            "data_loader_registry": execution_input.data_loader_registry,
            "validate_query": execution_input.validate_query,
        }

        execution_input.transform(
            lambda builder: builder.query("{ villain { name } }")
            .operation_name(None)
            .context(RequestContext("vader"))
            .root(None)
            .variables({"id": 1})
            .data_loader_registry(DataLoaderRegistry())
            .validate(False)
        )

        for field_name, value in before.items():
            assert getattr(execution_input, field_name) is value

    def test_variables_only_override(self, execution_input):
        transformed = execution_input.transform(lambda builder: builder.variables({"id": 43}))

        assert transformed.variables == {"id": 43}
        assert execution_input.variables == {"id": 42}
        assert transformed.query == execution_input.query
        assert transformed.operation_name == execution_input.operation_name
        assert transformed.validate_query == execution_input.validate_query
        assert transformed.context is execution_input.context
        assert transformed.root is execution_input.root
        assert transformed.data_loader_registry is execution_input.data_loader_registry

    def test_variables_are_shared_not_copied(self):
        variables = {"id": 42}
        original = ExecutionInput.new_execution_input(HERO_QUERY).variables(variables).build()

        transformed = original.transform(lambda builder: builder.validate(False))
        variables["episode"] = "EMPIRE"

        assert original.variables is variables
        assert transformed.variables is variables
        assert transformed.variables["episode"] == "EMPIRE"

    def test_consumer_is_called_once_with_seeded_builder(self, execution_input):
        seen = []

        def consumer(builder):
            seen.append(builder.build())

        execution_input.transform(consumer)

        assert len(seen) == 1
        assert seen[0] == execution_input

    def test_consumer_return_value_is_ignored(self, execution_input):
        transformed = execution_input.transform(lambda builder: "ignored")

        assert isinstance(transformed, ExecutionInput)

    def test_consumer_errors_propagate_unchanged(self, execution_input):
        failure = RuntimeError("consumer failed")

        def consumer(builder):
            builder.query("{ partial }")
            raise failure

        with pytest.raises(RuntimeError) as exc_info:
            execution_input.transform(consumer)

        assert exc_info.value is failure
        assert execution_input.query.startswith("query Hero")

    def test_transform_can_swap_registry(self, execution_input):
        registry = DataLoaderRegistry()

        transformed = execution_input.transform(lambda builder: builder.data_loader_registry(registry))

        assert transformed.data_loader_registry is registry
        assert execution_input.data_loader_registry is not registry


class TestExecutionInputEquality:
    """Query text and flags compare by value, collaborators by identity."""

    def test_equal_looking_collaborators_are_not_equal(self):
        registry = DataLoaderRegistry()

        first = ExecutionInputBuilder().query(HERO_QUERY).context([1]).data_loader_registry(registry).build()
        second = ExecutionInputBuilder().query(HERO_QUERY).context([1]).data_loader_registry(registry).build()

        assert first != second

    def test_separate_registries_are_not_equal(self):
        first = ExecutionInput.of(HERO_QUERY)
        second = ExecutionInput.of(HERO_QUERY)

        assert first != second

    def test_copied_variables_are_not_equal(self):
        variables = {"id": 42}
        registry = DataLoaderRegistry()
        builder = ExecutionInputBuilder().query(HERO_QUERY).data_loader_registry(registry)

        first = builder.variables(variables).build()
        second = builder.variables(dict(variables)).build()

        assert first != second

    def test_query_compares_by_value(self):
        registry = DataLoaderRegistry()
        query = "".join(["{ hero ", "{ name } }"])

        first = ExecutionInputBuilder().query(HERO_QUERY).data_loader_registry(registry).build()
        second = ExecutionInputBuilder().query(query).data_loader_registry(registry).build()

        assert first == second
        assert hash(first) == hash(second)

    def test_inputs_with_dict_values_are_hashable(self, execution_input):
        transformed = execution_input.transform(lambda builder: None)

        assert isinstance(execution_input.root, dict)
        assert hash(execution_input) == hash(transformed)
        assert len({execution_input, transformed}) == 1

    def test_other_types_are_not_equal(self, execution_input):
        assert execution_input != execution_input.to_log_dict()
        assert execution_input != str(execution_input)


class TestExecutionInputRendering:
    """String and log representations."""

    def test_str_lists_all_fields(self, recording_loader_factory):
        registry = DataLoaderRegistry().register("characters", recording_loader_factory())
        execution_input = (
            ExecutionInput.new_execution_input(HERO_QUERY)
            .operation_name("Hero")
            .root("root-object")
            .variables({"id": 42})
            .data_loader_registry(registry)
            .build()
        )

        rendered = str(execution_input)

        assert rendered.startswith("ExecutionInput{")
        assert "query='{ hero { name } }'" in rendered
        assert "operation_name='Hero'" in rendered
        assert "context=None" in rendered
        assert "root='root-object'" in rendered
        assert "variables={'id': 42}" in rendered
        assert "data_loader_registry=DataLoaderRegistry(keys=['characters'])" in rendered
        assert "validate_query=True" in rendered
        assert "dispatch_count" not in rendered

    def test_to_log_dict_omits_variable_values(self, execution_input):
        summary = execution_input.to_log_dict()

        assert summary["operation_name"] == "Hero"
        assert summary["variable_names"] == ["id"]
        assert "variables" not in summary
        assert summary["query_length"] == len(execution_input.query)
        assert summary["data_loader_keys"] == []
        assert summary["validate_query"] is True

    def test_to_log_dict_truncates_long_queries(self, monkeypatch):
        monkeypatch.setenv("QUERYFLOW_LOG_QUERY_MAX_LENGTH", "6")
        _reload_settings()

        summary = ExecutionInput.of(HERO_QUERY).to_log_dict()

        assert summary["query"] == "{ hero..."
        assert summary["query_length"] == len(HERO_QUERY)

    def test_build_logs_summary_at_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="queryflow.execution.input")

        ExecutionInput.new_execution_input(HERO_QUERY).variables({"id": 42}).build()

        records = [r for r in caplog.records if r.getMessage() == "Built execution input"]
        assert len(records) == 1
        assert records[0].variable_names == ["id"]
        assert records[0].operation_name is None
