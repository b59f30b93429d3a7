# 需要系统安装graphviz才能渲染: brew install graphviz / apt install graphviz
from graphviz import Digraph
import uuid


def trace(root):
    """
    遍历计算图，收集所有节点和边（只读，不修改任何节点）

    参数:
        root: 计算图的根节点（通常是损失节点）

    返回:
        nodes: list，按首次访问顺序排列的所有节点
        edges: list，每条边是 (child, parent)，同一操作数出现两次时边也出现两次
    """
    nodes, edges = [], []
    seen = set()

    def build(v):
        if v not in seen:
            seen.add(v)
            nodes.append(v)
            for child in v.children:
                edges.append((child, v))
                build(child)

    build(root)
    return nodes, edges


def draw_dot(root, format='svg', rankdir='LR'):
    """
    使用Graphviz创建计算图的可视化

    参数:
        root: 计算图的根节点
        format: 输出格式，'svg' / 'png' / 'pdf'
        rankdir: 'LR' 从左到右，'TB' 从上到下

    返回:
        Digraph对象，可以调用 .render() 或 .source

    用法示例:
        loss.backward()
        dot = draw_dot(loss, format='png')
        dot.render('loss_graph')
    """
    assert rankdir in ['LR', 'TB'], f"rankdir必须是 'LR' 或 'TB', 得到 '{rankdir}'"
    nodes, edges = trace(root)
    dot = Digraph(name=str(uuid.uuid4()), format=format, graph_attr={'rankdir': rankdir})

    for n in nodes:
        uid = str(id(n))
        if n.label:
            label = "{ %s | data %.4f | grad %.4f }" % (n.label, n.data, n.grad)
        else:
            label = "{ data %.4f | grad %.4f }" % (n.data, n.grad)
        dot.node(name=uid, label=label, shape='record')
        # 派生节点额外画一个操作符节点，指向数据节点
        if n._op:
            dot.node(name=uid + n._op, label=n._op)
            dot.edge(uid + n._op, uid)

    for child, parent in edges:
        dot.edge(str(id(child)), str(id(parent)) + parent._op)

    return dot
