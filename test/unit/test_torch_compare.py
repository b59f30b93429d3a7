"""
与PyTorch的自动微分结果做横向对比
"""

import pytest
import torch

from scalargrad.engine import Node
from scalargrad.loss import mean_squared_error
from scalargrad.nn import MLP


def test_expression_matches_torch():
    x = Node(-4.0)
    z = 2 * x + 2 + x
    q = z.relu() + z * x
    h = (z * z).relu()
    y = h + q + q * x
    y.backward()
    xmg, ymg = x, y

    x = torch.tensor([-4.0], dtype=torch.double, requires_grad=True)
    z = 2 * x + 2 + x
    q = z.relu() + z * x
    h = (z * z).relu()
    y = h + q + q * x
    y.backward()
    xpt, ypt = x, y

    assert ymg.data == pytest.approx(ypt.data.item())
    assert xmg.grad == pytest.approx(xpt.grad.item())


def test_more_ops_match_torch():
    a = Node(-4.0)
    b = Node(2.0)
    c = a + b
    d = a * b + b ** 3
    c = c + c + 1
    c = c + 1 + c + (-a)
    d = d + d * 2 + (b + a).relu()
    d = d + 3 * d + (b - a).relu()
    e = c - d
    f = e ** 2
    g = f / 2.0
    g = g + 10.0 / f
    g = g + d.tanh()
    g.backward()
    amg, bmg, gmg = a, b, g

    a = torch.tensor([-4.0], dtype=torch.double, requires_grad=True)
    b = torch.tensor([2.0], dtype=torch.double, requires_grad=True)
    c = a + b
    d = a * b + b ** 3
    c = c + c + 1
    c = c + 1 + c + (-a)
    d = d + d * 2 + (b + a).relu()
    d = d + 3 * d + (b - a).relu()
    e = c - d
    f = e ** 2
    g = f / 2.0
    g = g + 10.0 / f
    g = g + d.tanh()
    g.backward()
    apt, bpt, gpt = a, b, g

    assert gmg.data == pytest.approx(gpt.data.item())
    assert amg.grad == pytest.approx(apt.grad.item())
    assert bmg.grad == pytest.approx(bpt.grad.item())


def test_mlp_gradients_match_torch():
    net = MLP(3, [4, 1], seed=11)
    xs = [[2.0, 3.0, -1.0], [3.0, -1.0, 0.5]]
    ys = [1.0, -1.0]

    ypred = [out for x in xs for out in net(x)]
    loss = mean_squared_error(ys, ypred)
    loss.backward()

    # 用同样的参数搭一个PyTorch网络
    layers = []
    for layer in net.layers:
        w = torch.tensor([[p.data for p in n.w] for n in layer.neurons],
                         dtype=torch.double, requires_grad=True)
        b = torch.tensor([n.b.data for n in layer.neurons], dtype=torch.double, requires_grad=True)
        layers.append((w, b))

    out = torch.tensor(xs, dtype=torch.double)
    for w, b in layers:
        out = torch.tanh(out @ w.T + b)
    loss_pt = ((out.squeeze(1) - torch.tensor(ys, dtype=torch.double)) ** 2).sum()
    loss_pt.backward()

    assert loss.data == pytest.approx(loss_pt.item())
    for layer, (w, b) in zip(net.layers, layers):
        for i, n in enumerate(layer.neurons):
            assert [p.grad for p in n.w] == pytest.approx(w.grad[i].tolist())
            assert n.b.grad == pytest.approx(b.grad[i].item())
