# tests/conftest.py
"""
Shared test fixtures.
Stub model: a vehicle with nested parts, attributes and ports, plus a few
relationships (one of them dangling).
"""
import pytest
from sysml_diagram import Relationship, Symbol


# ── Symbol definitions ───────────────────────────────────────────
_SYMBOLS = [
    dict(name="Vehicle",  qualifiedName="Pkg::Vehicle",         nodeType="PartDef"),
    dict(name="mass",     qualifiedName="Pkg::Vehicle::mass",   nodeType="AttributeUsage",
         parent="Pkg::Vehicle", typedBy="ISQ::MassValue"),
    dict(name="fuelIn",   qualifiedName="Pkg::Vehicle::fuelIn", nodeType="PortUsage",
         parent="Pkg::Vehicle", direction="in", typedBy="Pkg::FuelPort"),
    dict(name="engine",   qualifiedName="Pkg::Vehicle::engine", nodeType="PartUsage",
         parent="Pkg::Vehicle", typedBy="Pkg::Engine"),
    dict(name="wheels",   qualifiedName="Pkg::Vehicle::wheels", nodeType="PartUsage",
         parent="Pkg::Vehicle"),
    dict(name="Engine",   qualifiedName="Pkg::Engine",          nodeType="PartDef",
         features=["part cylinders : Cylinder"]),
    dict(name="FuelPort", qualifiedName="Pkg::FuelPort",        nodeType="PortDef"),
]

# ── Relationship definitions ─────────────────────────────────────
_RELATIONSHIPS = [
    dict(type="typing",         source="Pkg::Vehicle::engine", target="Pkg::Engine"),
    dict(type="composition",    source="Pkg::Vehicle",         target="Pkg::Engine", multiplicity="1"),
    dict(type="specialization", source="Pkg::Engine",          target="Pkg::Missing"),
]


class FakeEngine:
    """In-process layout engine: places every node on a diagonal."""

    def __init__(self, error: Exception | None = None):
        self.requests: list[dict] = []
        self.error = error

    async def layout(self, graph: dict) -> dict:
        self.requests.append(graph)
        if self.error is not None:
            raise self.error

        counter = iter(range(1000))

        def place(node: dict) -> dict:
            i = next(counter)
            laid = dict(node, x=i * 10, y=i * 20)
            if "children" in node:
                laid["children"] = [place(c) for c in node["children"]]
            return laid

        return dict(graph, children=[place(c) for c in graph["children"]])


# ── Pytest fixtures ──────────────────────────────────────────────

@pytest.fixture
def symbols() -> list[Symbol]:
    """Vehicle model: 4 structural symbols, 1 attribute, 2 ports."""
    return [Symbol(**s) for s in _SYMBOLS]


@pytest.fixture
def relationships() -> list[Relationship]:
    """Two resolvable relationships and one with a dangling target."""
    return [Relationship(**r) for r in _RELATIONSHIPS]


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def failing_engine() -> FakeEngine:
    """Engine that rejects every request."""
    return FakeEngine(error=RuntimeError("engine crashed"))
