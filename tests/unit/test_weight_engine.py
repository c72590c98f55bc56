import pytest
from startorder.RESOLVERS.weight_engine import assign_weights
from startorder.RESOLVERS.errors import (
    CircularDependencyError,
    DanglingDependencyError,
    UnresolvableDependencyError,
)


class TestAssignWeights:
    """Tests for weight propagation."""

    def test_no_dependencies_weigh_zero(self):
        weights = assign_weights({'a': set(), 'b': set()})
        assert weights == {'a': 0, 'b': 0}

    def test_chain(self):
        graph = {'d': {'c'}, 'c': {'b'}, 'b': {'a'}, 'a': set()}
        assert assign_weights(graph) == {'d': 3, 'c': 2, 'b': 1, 'a': 0}

    def test_weight_follows_heaviest_dependency(self):
        graph = {'a': set(), 'b': {'a'}, 'c': {'b'}, 'd': {'a', 'c'}}
        assert assign_weights(graph)['d'] == 3

    def test_result_keeps_graph_order(self):
        graph = {'web': {'db'}, 'db': set()}
        assert list(assign_weights(graph)) == ['web', 'db']

    def test_empty_graph(self):
        assert assign_weights({}) == {}

    def test_cycle_reports_stuck_services(self):
        graph = {'x': {'y'}, 'y': {'x'}, 'z': set()}
        with pytest.raises(CircularDependencyError) as exc_info:
            assign_weights(graph)
        assert exc_info.value.unresolved == {'x', 'y'}
        assert exc_info.value.cycle in (['x', 'y', 'x'], ['y', 'x', 'y'])

    def test_cycle_includes_dependents(self):
        graph = {'x': {'y'}, 'y': {'x'}, 'app': {'x'}}
        with pytest.raises(UnresolvableDependencyError) as exc_info:
            assign_weights(graph)
        assert exc_info.value.unresolved == {'x', 'y', 'app'}
        assert 'app' not in exc_info.value.cycle

    def test_self_dependency(self):
        with pytest.raises(CircularDependencyError) as exc_info:
            assign_weights({'a': {'a'}})
        assert exc_info.value.cycle == ['a', 'a']

    def test_dangling_reference(self):
        graph = {'web': {'ghost'}, 'proxy': {'web'}, 'db': set()}
        with pytest.raises(DanglingDependencyError) as exc_info:
            assign_weights(graph)
        assert exc_info.value.unresolved == {'web', 'proxy'}
        assert exc_info.value.missing == {'web': {'ghost'}}
        assert isinstance(exc_info.value, UnresolvableDependencyError)

    def test_dangling_reference_wins_over_cycle(self):
        graph = {'x': {'y'}, 'y': {'x'}, 'w': {'ghost'}}
        with pytest.raises(DanglingDependencyError) as exc_info:
            assign_weights(graph)
        assert exc_info.value.unresolved == {'x', 'y', 'w'}
        assert exc_info.value.missing == {'w': {'ghost'}}

    def test_error_message_names_services(self):
        with pytest.raises(UnresolvableDependencyError, match=r"\['x', 'y'\]"):
            assign_weights({'y': {'x'}, 'x': {'y'}})
