"""Infrastructure layer for the socket chat client.

The infrastructure layer contains implementations of domain interfaces:
- Connection state machine and connection manager
- Transport implementations (WebSocket via websockets)
- Scheduler implementations (asyncio event loop)
- Protocol simulator and the capitalizing server

This layer depends on:
- Domain layer (interfaces and value objects)
- External libraries (websockets)

But domain layer does NOT depend on infrastructure.
"""
