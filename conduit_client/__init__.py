"""Conduit client - state synchronisation for a Conduit (RealWorld) blog.

Keeps a browser-style client consistent with the remote API: who is
signed in, which article list is shown, what the focused article or
profile looks like after local actions, and whether a write is already
being submitted.

Sub-packages:
- protocols/  - Interfaces and domain types (Identity, Article, QueryDescriptor, ...)
- state/      - StateCell and EventStream publication primitives
- api/        - Typed wrappers over the REST endpoints
- overlay/    - Optimistic overlays and their patches
- views/      - Page controllers (home, article, profile, editor, settings, auth)
- utils/      - structlog logging

Top-level modules:
- session     - SessionStore, the single source of truth for the current user
- query       - ArticleListQuery, the paginated list engine
- mutations   - Mutation, the guarded write action
- actions     - ConduitActions, the catalogue of write actions
- navigation  - Navigation sinks and route guards
- transport   - httpx transport
- storage     - Token persistence backends
- settings    - pydantic-settings configuration
- bootstrap   - AppContext creation, composition root

Usage:
    from conduit_client.bootstrap import create_app_context, startup

    ctx = create_app_context()
    await startup(ctx)
"""

__version__ = "1.0.0"
