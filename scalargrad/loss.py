from scalargrad.engine import Node


def mean_squared_error(targets, predictions):
    """
    平方误差之和: Σ(pred_i - target_i)^2

    注意: 名字叫mean但不除以样本数，训练时的学习率是按求和的尺度调的。

    Args:
        targets: 目标值列表，Node或数值
        predictions: 预测值列表，Node

    Returns:
        Node: 损失值
    """
    assert len(targets) == len(predictions), \
        f"目标值数量({len(targets)})与预测值数量({len(predictions)})不匹配"

    loss = Node(0)
    for target, pred in zip(targets, predictions):
        loss = loss + (pred - target) ** 2
    return loss


class MSELoss:
    """均方误差损失函数

    Args:
        reduction: 'sum', 'mean', 'none'
            - 'sum': 返回损失总和 (默认，与mean_squared_error一致)
            - 'mean': 返回平均损失
            - 'none': 返回每个样本的损失
    """

    def __init__(self, reduction='sum'):
        assert reduction in ['mean', 'sum', 'none'], \
            f"reduction必须是 'mean', 'sum' 或 'none', 得到 '{reduction}'"
        self.reduction = reduction

    def __call__(self, predictions, targets):
        # 统一处理单个值和列表的情况
        if not isinstance(predictions, list):
            predictions = [predictions]
        if not isinstance(targets, list):
            targets = [targets]

        if self.reduction == 'none':
            assert len(predictions) == len(targets), \
                f"预测值数量({len(predictions)})与目标值数量({len(targets)})不匹配"
            return [(pred - target) ** 2 for pred, target in zip(predictions, targets)]

        total_loss = mean_squared_error(targets, predictions)
        if self.reduction == 'sum':
            return total_loss
        assert len(predictions) > 0, "reduction='mean' 需要至少一个样本"
        # 除以样本数量得到平均损失
        return total_loss * (1.0 / len(predictions))

    def __repr__(self):
        return f"MSELoss(reduction='{self.reduction}')"
