import numpy as np


class Node:

    def __init__(self, data, _children=(), _op='', label=''):
        # 存储数值
        self.data = float(data)
        # 存储梯度
        self.grad = 0.0
        # 反向传播函数，叶子节点为空操作
        self._backward = lambda: None
        # 子节点（操作数），保持调用顺序，允许同一节点出现两次（a + a）
        self._prev = tuple(_children)
        # 操作类型，用于调试和可视化
        self._op = _op
        # 显示用标签，不影响计算
        self.label = label

    @property
    def children(self):
        return self._prev

    def __add__(self, other):
        # 确保other也是Node对象
        other = other if isinstance(other, Node) else Node(other)
        out = Node(self.data + other.data, (self, other), '+')

        def _backward():
            self.grad += out.grad
            other.grad += out.grad

        out._backward = _backward

        return out

    def __mul__(self, other):
        other = other if isinstance(other, Node) else Node(other)
        out = Node(self.data * other.data, (self, other), '*')

        def _backward():
            self.grad += other.data * out.grad
            other.grad += self.data * out.grad

        out._backward = _backward

        return out

    def __pow__(self, other):
        assert isinstance(other, (int, float)), \
            f"只支持int/float指数，得到 {type(other).__name__}"
        k = float(other)
        # np.power: 负底数的分数次幂得到nan，0的负数次幂得到inf，不抛异常
        out = Node(np.power(self.data, k), (self,), f'**{other}')

        def _backward():
            self.grad += (k * np.power(self.data, k - 1)) * out.grad

        out._backward = _backward

        return out

    def relu(self):
        out = Node(self.data if self.data > 0 else 0.0, (self,), 'ReLU')

        def _backward():
            # 零点处按单侧约定取0梯度
            if out.data > 0:
                self.grad += out.grad

        out._backward = _backward

        return out

    def tanh(self):
        t = np.tanh(self.data)
        out = Node(t, (self,), 'tanh')

        def _backward():
            self.grad += (1 - t * t) * out.grad

        out._backward = _backward

        return out

    def sigmoid(self):
        s = 1 / (1 + np.exp(-self.data))
        out = Node(s, (self,), 'sigmoid')

        def _backward():
            self.grad += s * (1 - s) * out.grad

        out._backward = _backward

        return out

    def topo(self):
        """
        返回从当前节点可达子图的拓扑序列（后序）

        每个节点只出现一次，且总排在它所有子节点之后。
        """
        topo = []
        visited = set()

        def build_topological_order(v):
            if v not in visited:
                visited.add(v)
                # 先处理所有子节点
                for child in v._prev:
                    build_topological_order(child)
                # 再将当前节点加入拓扑序列
                topo.append(v)

        build_topological_order(self)
        return topo

    def backward(self):
        # 第一步：拓扑图排序，确保按正确顺序处理节点
        topo = self.topo()

        # 第二步：初始化输出节点的梯度为1
        self.grad = 1.0
        # 第三步：按拓扑图逆序进行反向传播
        # 逆序保证每个节点的梯度在传给子节点前已经从所有父节点累加完毕
        for v in reversed(topo):
            v._backward()

    def descend(self, learning_rate):
        """梯度下降一步: data += -lr * grad"""
        self.data += -learning_rate * self.grad

    def __neg__(self):  # -self
        return self * -1

    def __radd__(self, other):  # other + self
        return self + other

    def __sub__(self, other):  # self - other
        return self + (-other)

    def __rsub__(self, other):  # other - self
        return other + (-self)

    def __rmul__(self, other):  # other * self
        return self * other

    def __truediv__(self, other):  # self / other
        # 先包装成Node，除数为0时走np.power得到inf
        other = other if isinstance(other, Node) else Node(other)
        return self * other ** -1

    def __rtruediv__(self, other):  # other / self
        other = other if isinstance(other, Node) else Node(other)
        return other * self ** -1

    def __repr__(self):
        return f"Node(data={self.data}, grad={self.grad})"


def scalars(*values):
    """把一组数值包装成叶子节点列表"""
    return [Node(v) for v in values]
