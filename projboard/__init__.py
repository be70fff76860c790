# Project board: two lanes (active, finished) and drag-and-drop between them
#
# Components:
#   schema.py      - Data model (Project, LaneStatus)
#   store.py       - In-memory store with ordered change notification
#   dragdrop.py    - Drag session protocol (Draggable, DropTarget, DRAG_FORMAT)
#   validation.py  - New-project form rules
#   components.py  - Headless views (ProjectItem, ProjectList, ProjectInput, Board)
#   config.py      - YAML configuration
#   server.py      - Flask JSON API
