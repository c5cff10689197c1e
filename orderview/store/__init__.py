"""
Store — order loading with an explicit state machine.

    from orderview import store as S

    store = S.OrderStore(source, diagnostics=sink)
    store.mount()                 # implicit first load
    await store.refresh()         # explicit reload

    state = store.current_state() # Idle | Loading | Ready | Failed

Overlapping loads follow S.CompletionPolicy (LAST_ISSUED by default).
"""

from orderview.store._types import (
    LoadFailureKind,
    LoadFailure,
    LoadFailureError,
    CompletionPolicy,
    OrderSource,
    DiagnosticsSink,
    FunctionSource,
    source_from,
)
from orderview.store._store import (
    OrderStore,
    Listener,
    Unsubscribe,
)

__all__ = (
    # Failures
    "LoadFailureKind",
    "LoadFailure",
    "LoadFailureError",
    # Policy
    "CompletionPolicy",
    # Collaborators
    "OrderSource",
    "DiagnosticsSink",
    "FunctionSource",
    "source_from",
    # Store
    "OrderStore",
    "Listener",
    "Unsubscribe",
)
