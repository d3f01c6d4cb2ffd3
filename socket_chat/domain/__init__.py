"""Domain layer for the socket chat client.

This layer contains:
- Interfaces: Contracts for transports, handles, listeners and schedulers
- Value Objects: Immutable domain primitives (states, events, faults)
- Entities: The append-only event log
- Helpers: The pure text transform shared by client and server

The domain layer has ZERO dependencies on external libraries (except Python stdlib).
All external dependencies are abstracted behind interfaces.
"""
