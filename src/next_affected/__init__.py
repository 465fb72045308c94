"""next-affected — which Next.js pages does a change touch?

Walks a module dependency graph backwards from a changed file to every page
that (transitively) imports it, and reports the pages as routes.

Quick start::

    from next_affected import find_affected_pages, NextAffectedConfig

    graph = {
        "pages/blog/[slug].tsx": ["components/Post.tsx"],
        "components/Post.tsx": ["components/Button.tsx"],
    }
    find_affected_pages(graph, "components/Button.tsx", "/my-app", NextAffectedConfig())
    # ['/blog/[slug]']

From the command line::

    next-affected run src/components/Button.tsx
    next-affected run --base main

"""

__version__ = "0.1.1"
__all__ = [
    "AffectedPagesAnalyzer",
    "NextAffectedConfig",
    "RunOptions",
    "__version__",
    "find_affected_pages",
    "load_config",
    "run_next_affected",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import next_affected`` fast (the CLI reads ``__version__`` first).
    """
    if name == "NextAffectedConfig":
        from next_affected.config import NextAffectedConfig

        return NextAffectedConfig

    if name == "load_config":
        from next_affected.config_loader import load_config

        return load_config

    if name == "find_affected_pages":
        from next_affected.graph.traversal import find_affected_pages

        return find_affected_pages

    if name in ("AffectedPagesAnalyzer", "RunOptions", "run_next_affected"):
        from next_affected import run

        return getattr(run, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
