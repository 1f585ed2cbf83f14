# MiDaPlaner: boards, columns, tasks and milestones for a small team
#
# Components:
#   schema.py      - Data model (Role, Status, User, Milestone, Task, Column, Board)
#   errors.py      - Error taxonomy shared by the API and presentation layers
#   auth.py        - In-memory user registry (register/login)
#   controller.py  - Session state and board/column/task operations
#   api.py         - Handle-based API surface (session, board, column, task ids)
#   summary.py     - Plain-text projections of the model
#   config.py      - YAML + environment configuration
#   server.py      - Flask JSON API
#   cli.py         - Command line entry point (serve, verify)

__version__ = "0.3.0"
