from scalargrad.engine import Node
from scalargrad.utils.draw_utils import draw_dot, trace


def build_graph():
    a = Node(2.0, label='a')
    b = Node(-3.0, label='b')
    c = Node(10.0, label='c')
    d = a * b + c
    d.label = 'd'
    d.backward()
    return a, b, c, d


def test_trace_collects_all_nodes_and_edges():
    a, b, c, d = build_graph()
    nodes, edges = trace(d)
    assert len(nodes) == 5
    assert nodes[0] is d
    assert len(edges) == 4
    assert (c, d) in edges


def test_trace_shared_operand():
    a = Node(1.0)
    b = a + a
    nodes, edges = trace(b)
    assert len(nodes) == 2
    assert edges == [(a, b), (a, b)]


def test_draw_dot_does_not_mutate_graph():
    a, b, c, d = build_graph()
    before = [(n.data, n.grad) for n in (a, b, c, d)]
    dot = draw_dot(d, rankdir='TB')
    assert [(n.data, n.grad) for n in (a, b, c, d)] == before

    source = dot.source
    assert 'rankdir=TB' in source
    assert 'data 4.0000' in source
    assert 'grad -3.0000' in source
    assert 'd | data' in source
