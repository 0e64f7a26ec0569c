import pytest

from datadesk.config import ContinentLookup
from datadesk.graph import build_roster_graph, summarize_teammate_clusters, team_totals
from datadesk.models import GraphConsistencyError, GraphEdge, PlayerRecord


def _graph(rows: list[tuple[str, str, str]]):
    players = [PlayerRecord(player_name=n, national_team=t, club=c) for n, t, c in rows]
    return build_roster_graph(players, ContinentLookup())


def test_end_to_end_scenario_totals():
    graph = _graph(
        [
            ("p1", "TeamA", "ClubX"),
            ("p2", "TeamA", "ClubX"),
            ("p3", "TeamA", "ClubY"),
            ("p4", "TeamB", "ClubY"),
        ]
    )

    summary = summarize_teammate_clusters(graph.edges, graph.nodes)

    assert summary == {"TeamA": (2, 0), "TeamB": (0,)}
    assert team_totals(summary) == {"TeamA": 2, "TeamB": 0}


def test_lone_players_never_count_and_pairs_count_two():
    graph = _graph(
        [
            ("a", "Uruguay", "Atletico"),
            ("b", "Uruguay", "Atletico"),
            ("c", "Uruguay", "Juventus"),
            ("d", "Uruguay", "Barcelona"),
        ]
    )

    summary = summarize_teammate_clusters(graph.edges, graph.nodes)

    assert summary["Uruguay"] == (2, 0, 0)
    assert team_totals(summary)["Uruguay"] == 2


def test_teams_ranked_by_total_then_label():
    graph = _graph(
        [
            ("a", "Spain", "Real Madrid"),
            ("b", "Spain", "Real Madrid"),
            ("c", "Spain", "Real Madrid"),
            ("d", "Spain", "Barcelona"),
            ("e", "Spain", "Barcelona"),
            ("f", "Belgium", "Chelsea"),
            ("g", "Belgium", "Chelsea"),
            ("h", "Argentina", "Chelsea"),
            ("i", "Argentina", "Chelsea"),
            ("j", "Iceland", "Burnley"),
        ]
    )

    summary = summarize_teammate_clusters(graph.edges, graph.nodes)

    assert list(summary) == ["Spain", "Argentina", "Belgium", "Iceland"]
    assert summary["Spain"] == (3, 2)
    assert summary["Iceland"] == (0,)


def test_unknown_node_id_is_fatal():
    graph = _graph([("a", "Peru", "Alianza")])

    with pytest.raises(GraphConsistencyError):
        summarize_teammate_clusters(list(graph.edges) + [GraphEdge(from_id=1, to_id=42, weight=3)], graph.nodes)


def test_edge_into_club_is_fatal():
    graph = _graph([("a", "Peru", "Alianza")])

    with pytest.raises(GraphConsistencyError):
        summarize_teammate_clusters([GraphEdge(from_id=2, to_id=1, weight=2)], graph.nodes)


def test_empty_graph_summarizes_to_empty_mapping():
    assert summarize_teammate_clusters([], []) == {}
