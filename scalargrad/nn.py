import logging

import numpy as np

from scalargrad.engine import Node

logger = logging.getLogger(__name__)

ACTIVATIONS = ['tanh', 'relu', 'sigmoid', 'linear']


def make_rand_unit(seed=None):
    """
    创建参数初始化用的随机源

    seed: 随机种子，None表示不固定
    返回: 无参函数，每次调用返回 [-1, 1] 上均匀分布的一个float
    """
    rng = np.random.default_rng(seed)

    def rand_unit():
        return float(rng.uniform(-1, 1))

    return rand_unit


class Parameters(list):
    """参数的扁平视图，元素是网络中真实的参数节点（引用而非拷贝）"""

    def zero_grad(self):
        for p in self:
            p.grad = 0.0

    def descend(self, learning_rate):
        for p in self:
            p.descend(learning_rate)


class Module:

    def zero_grad(self):
        self.parameters().zero_grad()

    def parameters(self):
        return Parameters()


class Neuron(Module):

    def __init__(self, nin, activation='tanh', weights=None, bias=None, rand_unit=None):
        """
        nin: 输入维度
        activation: 激活函数类型 - 'tanh', 'relu', 'sigmoid', 'linear'
        weights: 指定的权重列表，如果为None则随机初始化
        bias: 指定的偏置值，如果为None则随机初始化
        rand_unit: 随机源，无参函数，返回 [-1, 1] 内的float
        """
        assert nin >= 1, f"输入维度必须至少为1，得到 {nin}"
        assert activation in ACTIVATIONS, \
            f"不支持的激活函数: {activation}. 支持的函数: {', '.join(ACTIVATIONS)}"
        if rand_unit is None:
            rand_unit = make_rand_unit()

        if weights is not None:
            assert len(weights) == nin, f"权重数量 {len(weights)} 不匹配输入维度 {nin}"

        # 先取偏置，再取权重
        if bias is not None:
            self.b = Node(bias)
        else:
            self.b = Node(rand_unit())

        if weights is not None:
            self.w = [Node(w) for w in weights]
        else:
            self.w = [Node(rand_unit()) for _ in range(nin)]

        self.activation = activation

    def __call__(self, x):
        assert len(x) == len(self.w), \
            f"输入数量 {len(x)} 不匹配权重数量 {len(self.w)}"

        # bias + x1*w1 + x2*w2 + ... + xn*wn
        act = self.b
        for wi, xi in zip(self.w, x):
            xi = xi if isinstance(xi, Node) else Node(xi)
            act = act + xi * wi

        if self.activation == 'tanh':
            return act.tanh()
        elif self.activation == 'relu':
            return act.relu()
        elif self.activation == 'sigmoid':
            return act.sigmoid()
        return act

    def parameters(self):
        """
        返回神经元的所有参数

        返回: 权重列表 + 偏置 = [w1, w2, ..., wn, b]
        """
        return Parameters(self.w + [self.b])

    def __repr__(self):
        return f"{self.activation.capitalize()}Neuron({len(self.w)})"


class Layer(Module):

    def __init__(self, nin, nout, activation='tanh', rand_unit=None, **kwargs):
        if rand_unit is None:
            rand_unit = make_rand_unit()
        self.neurons = [Neuron(nin, activation=activation, rand_unit=rand_unit, **kwargs)
                        for _ in range(nout)]

    def __call__(self, x):
        return [n(x) for n in self.neurons]

    def parameters(self):
        return Parameters(p for n in self.neurons for p in n.parameters())

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):

    def __init__(self, nin, nouts, hidden_activation='tanh', output_activation='tanh',
                 rand_unit=None, seed=None):
        """
        nin: 输入维度
        nouts: 每一层的输出维度，例如 [4, 4, 1]
        hidden_activation / output_activation: 隐藏层和输出层的激活函数，
            默认两者都是tanh，输出层同样经过非线性
        rand_unit: 参数初始化的随机源；为None时由seed创建
        """
        if rand_unit is None:
            rand_unit = make_rand_unit(seed)

        sz = [nin] + list(nouts)
        self.layers = []

        for i in range(len(nouts)):
            if i == len(nouts) - 1:  # 输出层
                activation = output_activation
            else:  # 隐藏层
                activation = hidden_activation

            self.layers.append(Layer(sz[i], sz[i + 1], activation=activation, rand_unit=rand_unit))

        logger.debug("构建MLP: 层尺寸 %s, 参数总数 %d", sz, len(self.parameters()))

    def __call__(self, x):
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        return Parameters(p for layer in self.layers for p in layer.parameters())

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
