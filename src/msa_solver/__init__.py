"""msa-solver: Minimum Spanning Arborescence via Chu-Liu-Edmonds.

Computes the total weight of the cheapest directed spanning tree rooted
at a given node of an integer-weighted digraph, or reports that the
root cannot reach every node.  Negative weights, parallel edges and
self-loops are accepted.

>>> from msa_solver import solve
>>> solve(4, 0, [(0, 1, 10), (0, 2, 12), (1, 2, 5), (2, 1, 3), (0, 3, 20)]).weight
35
"""
from .errors import MSAError, NoArborescenceExists, InvalidArgument
from .graph import Edge, GraphSnapshot, WEIGHT_LIMIT, validate_problem
from .options import SolverOptions, DEFAULT_OPTIONS
from .result import MSAResult
from .trace import RoundTrace, SolveTrace
from .solver import (
    solve, solve_snapshot, minimum_arborescence_weight,
    select_min_incoming, stranded_nodes, find_cycles, contract,
)

# Reference solver & serialisation
from .baselines import exhaustive_weight, is_arborescence
from .serialization import (
    graph_to_dict, graph_from_dict, graph_to_json, graph_from_json,
    save_graph, load_graph,
)

# Acceptance corpus
from .scenarios import (
    Scenario, ScenarioResult, ScenarioReport,
    ACCEPTANCE_SCENARIOS, SAMPLE_SCENARIO, run_scenarios,
)

__all__ = [
    # Errors
    "MSAError", "NoArborescenceExists", "InvalidArgument",
    # Data model
    "Edge", "GraphSnapshot", "WEIGHT_LIMIT", "validate_problem",
    # Solver
    "SolverOptions", "DEFAULT_OPTIONS",
    "MSAResult", "RoundTrace", "SolveTrace",
    "solve", "solve_snapshot", "minimum_arborescence_weight",
    "select_min_incoming", "stranded_nodes", "find_cycles", "contract",
    # Reference & I/O
    "exhaustive_weight", "is_arborescence",
    "graph_to_dict", "graph_from_dict", "graph_to_json", "graph_from_json",
    "save_graph", "load_graph",
    # Scenarios
    "Scenario", "ScenarioResult", "ScenarioReport",
    "ACCEPTANCE_SCENARIOS", "SAMPLE_SCENARIO", "run_scenarios",
]

__version__ = "0.1.0"
