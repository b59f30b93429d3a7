import argparse
import logging

from tqdm import tqdm

from scalargrad.engine import scalars
from scalargrad.loss import mean_squared_error
from scalargrad.nn import MLP
from scalargrad.optim.sgd import SGD
from scalargrad.utils.draw_utils import draw_dot

logger = logging.getLogger(__name__)

# 玩具数据集: 4个样本，3维输入，目标为 ±1
XS = [
    [2.0, 3.0, -1.0],
    [3.0, -1.0, 0.5],
    [0.5, 1.0, 1.0],
    [1.0, 1.0, -1.0],
]
YS = [1.0, -1.0, -1.0, 1.0]


def train(net, xs, ys, steps=20, lr=0.05, tolerance=1e-5):
    """
    训练循环: 前向 -> 损失 -> 清零梯度 -> 反向 -> 梯度下降

    返回: 每一步的损失值列表，以及最后一步的损失节点
    """
    assert steps >= 1, f"训练步数必须至少为1，得到 {steps}"
    optimizer = SGD(net.parameters(), lr=lr)
    targets = scalars(*ys)
    losses = []
    loss = None

    for step in tqdm(range(steps), desc='training'):
        # 前向传播，每一步重新构建计算图
        ypred = []
        for x in xs:
            ypred.extend(net(scalars(*x)))
        loss = mean_squared_error(targets, ypred)

        # 反向传播
        optimizer.zero_grad()
        loss.backward()

        # 参数更新
        optimizer.step()

        losses.append(loss.data)
        logger.info("step %3d: loss = %.6f", step, loss.data)

        if abs(loss.data) < tolerance:
            logger.info("损失低于 %g，提前结束", tolerance)
            break

    return losses, loss


def main(argv=None):
    parser = argparse.ArgumentParser(description='在玩具数据集上训练一个标量MLP')
    parser.add_argument('--steps', type=int, default=20, help='训练步数')
    parser.add_argument('--lr', type=float, default=0.05, help='学习率')
    parser.add_argument('--seed', type=int, default=None, help='参数初始化的随机种子')
    parser.add_argument('--dot', default=None, help='把最终损失的计算图渲染到该路径')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')

    net = MLP(3, [4, 4, 1], seed=args.seed)
    logger.info("网络结构: %s", net)
    logger.info("参数总数: %d", len(net.parameters()))

    losses, loss = train(net, XS, YS, steps=args.steps, lr=args.lr)
    print("result =", losses[-1])

    if args.dot:
        draw_dot(loss, format='svg').render(args.dot)
        logger.info("计算图已保存到 %s", args.dot)


if __name__ == "__main__":
    main()
