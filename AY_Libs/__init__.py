"""
AY_Libs - Ayra Retouch Library Modules

This package contains the core functionality behind the Ayra retouch shell,
organized into specialized sub-packages:

- ImageEditingLib: Image resources, intake/export helpers and the crop compositor
- HistoryLib: Linear undo/redo ledger over image resources
- DisplayLib: Display handle lifetime management for presented images
- PromptLib: Instruction composition from retouch badges, wardrobe picks and free text
- SessionLib: Edit session wiring user actions to the generative edit backend
"""

__version__ = "0.1.0"
