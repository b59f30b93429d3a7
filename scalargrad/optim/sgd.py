from scalargrad.nn import Parameters


class SGD:
    """随机梯度下降优化器

    momentum=0 时就是普通的梯度下降: param.data += -lr * param.grad
    momentum>0 时使用梯度的指数加权平均(非标准动量法)
    """

    def __init__(self, parameters, lr=0.01, momentum=0.0):
        assert 0.0 <= momentum < 1.0, f"momentum必须在[0, 1)内，得到 {momentum}"
        # 引用网络中的参数节点，不拷贝
        self.parameters = Parameters(parameters)
        self.lr = lr
        self.momentum = momentum  # β 权重系数
        # 历史梯度移动加权平均值 St-1
        self.momentum_buffer = [0.0 for _ in self.parameters]

    def zero_grad(self):
        self.parameters.zero_grad()

    def step(self):
        """执行一步优化"""
        if self.momentum == 0.0:
            self.parameters.descend(self.lr)
            return

        for i, param in enumerate(self.parameters):
            # Dt = β * St-1 + (1 - β) * Wt
            self.momentum_buffer[i] = (self.momentum * self.momentum_buffer[i] +
                                       (1 - self.momentum) * param.grad)
            param.data -= self.lr * self.momentum_buffer[i]

    def __repr__(self):
        return f"SGD(lr={self.lr}, momentum={self.momentum}, parameters={len(self.parameters)})"
