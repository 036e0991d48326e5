def format_info(d, value, nodes, elapsed, direction, win_score):
        nps = int(nodes / elapsed) if elapsed > 0 else 0

        if value >= win_score:
            value_str = "win"
        else:
            value_str = f"score {value}"

        move_str = str(direction) if direction else "-"
        return f"info depth {d} {value_str} nodes {nodes} nps {nps} time {int(elapsed * 1000)} move {move_str}"


def render_board(grid, score, hint=None):
        lines = ["-------------------------", f"Score:\t{score}", "", f"Hint:\t{hint}", ""]
        for row in grid:
            lines.append("".join(f"{int(v)}\t" for v in row))
        lines.append("-------------------------")
        return "\n".join(lines)
