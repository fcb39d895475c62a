"""Container-internal path handling."""


def normalize(path: str) -> str:
    """Normalize a container path.

    Backslashes count as separators, empty and "." segments are dropped and
    ".." pops the previous segment (never above the root).
    """
    stack: list[str] = []
    for part in path.replace("\\", "/").split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            if stack:
                stack.pop()
        else:
            stack.append(part)
    return "/".join(stack)


def resolve(base_dir: str, href: str) -> str:
    """Resolve href relative to base_dir."""
    if not href:
        return href
    combined = f"{base_dir}/{href}" if base_dir else href
    return normalize(combined)


def parent_dir(path: str) -> str:
    """Directory part of a container path ("" at the root)."""
    idx = path.rfind("/")
    return path[:idx] if idx >= 0 else ""
