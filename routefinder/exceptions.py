# routefinder/exceptions.py


class RouteFinderError(Exception):
    """所有 routefinder 异常的基类"""


class ConfigurationError(RouteFinderError, ValueError):
    """
    输入不合法：空栅格/零尺寸图像、空图、起终点不在图中。
    调用方错误，立即抛出，不重试。
    """


class InternalInconsistencyError(RouteFinderError, RuntimeError):
    """
    前驱链回溯没有回到起点。
    说明搜索算法的松弛逻辑有 bug，与 "无路径" 是两回事。
    """
