import math


def format_score(score: float) -> str:
    if score == math.inf:
        return "win p1"
    if score == -math.inf:
        return "win p2"
    return f"{score:+g}"


def format_info(depth, score, nodes, elapsed, best_move) -> str:
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    move_str = "-" if best_move is None else str(best_move)
    return (f"info depth {depth} score {format_score(score)} nodes {nodes} "
            f"nps {nps} time {int(elapsed * 1000)} bestmove {move_str}")
