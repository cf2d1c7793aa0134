"""Career core: profile, state, clock and the engine facade.

Import from the submodules directly (``career.engine``, ``career.state``);
this package does not re-export them because the subsystem packages depend
on ``career.types``.
"""
