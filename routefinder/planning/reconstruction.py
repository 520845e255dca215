# routefinder/planning/reconstruction.py
from typing import Dict

from routefinder.types import Node, Path
from routefinder.exceptions import InternalInconsistencyError


def reconstruct_path(predecessors: Dict[Node, Node], start: Node, target: Node) -> Path:
    """
    从 target 沿前驱链回溯，直到一个没有前驱的节点 (应当就是 start)，再反转。

    链的终点不是 start，或者链里有环，都说明搜索算法本身有 bug，
    抛 InternalInconsistencyError (不是 "无路径")。
    """
    path = [target]
    current = target
    # 合法的链最多 len(predecessors) 步，超过就是有环
    max_steps = len(predecessors)

    while current in predecessors:
        if len(path) > max_steps:
            raise InternalInconsistencyError(f"Predecessor chain from {target} contains a cycle")
        current = predecessors[current]
        path.append(current)

    if current != start:
        raise InternalInconsistencyError(
            f"Predecessor chain from {target} ended at {current}, expected start {start}")

    path.reverse()
    return path
