"""
JetBrains IDE tools - Generic rule for mcp__jetbrains__* tools.

Tools without a dedicated rule in the dispatchers are described by an
(icon, label, priority) lookup plus a detail pulled from the first
non-empty candidate argument. Low-priority calls without a detail are
suppressed.

Used by dispatchers/pre_tool.py
"""
from dataclasses import dataclass

from notch_hook.config import Truncation
from notch_hook.hook_sdk import ToolInput
from notch_hook.hook_utils import truncate

PREFIX = "mcp__jetbrains__"

# tool name -> (icon, label, priority)
TOOL_LABELS = {
    # Project information
    "mcp__jetbrains__get_run_configurations": ("⚙️", "Get run configurations", 0),
    "mcp__jetbrains__get_project_modules": ("📦", "Get project modules", 0),
    "mcp__jetbrains__get_project_dependencies": ("🔗", "Get project dependencies", 0),
    "mcp__jetbrains__get_project_problems": ("⚠️", "Get project problems", 1),
    "mcp__jetbrains__get_project_vcs_status": ("🔀", "Get VCS status", 1),

    # File operations
    "mcp__jetbrains__list_directory_tree": ("🌳", "List directory tree", 0),
    "mcp__jetbrains__find_files_by_name_keyword": ("🔍", "Find files by name", 1),
    "mcp__jetbrains__find_files_by_glob": ("📁", "Find files by pattern", 1),
    "mcp__jetbrains__get_all_open_file_paths": ("📂", "Get open files", 0),
    "mcp__jetbrains__open_file_in_editor": ("📝", "Open file", 1),
    "mcp__jetbrains__get_file_text_by_path": ("📖", "Read file", 0),
    "mcp__jetbrains__get_file_problems": ("🔴", "Get file problems", 1),
    "mcp__jetbrains__reformat_file": ("✨", "Reformat file", 2),

    # Search and analysis
    "mcp__jetbrains__search_in_files_by_text": ("🔎", "Text search", 1),
    "mcp__jetbrains__search_in_files_by_regex": ("🔍", "Regex search", 1),
    "mcp__jetbrains__get_symbol_info": ("ℹ️", "Get symbol info", 0),
    "mcp__jetbrains__rename_refactoring": ("✏️", "Rename refactoring", 2),

    # Execution
    "mcp__jetbrains__execute_run_configuration": ("▶️", "Execute run configuration", 2),

    # Git
    "mcp__jetbrains__find_commit_by_message": ("📜", "Find commit", 1),
}

DEFAULT_LABEL = ("🔧", "JetBrains action", 1)

# Candidate argument fields, checked group by group in order
PATH_FIELDS = ("directoryPath", "pathInProject", "filePath", "path")
PATTERN_FIELDS = ("pattern", "globPattern", "nameKeyword", "searchText", "regexPattern", "text")
CONFIG_FIELDS = ("configurationName",)


@dataclass(frozen=True)
class IdeAction:
    icon: str
    label: str
    priority: int
    detail: str

    @property
    def should_notify(self) -> bool:
        return self.priority > 0 or bool(self.detail)

    @property
    def message(self) -> str:
        return self.detail or self.label


def extract_detail(tool_input: ToolInput) -> str:
    """First non-empty displayable argument, or ""."""
    path = tool_input.first_str(*PATH_FIELDS)
    if path:
        return truncate(path, Truncation.IDE_DETAIL)
    pattern = tool_input.first_str(*PATTERN_FIELDS)
    if pattern:
        return truncate(pattern, Truncation.IDE_DETAIL)
    return tool_input.first_str(*CONFIG_FIELDS) or ""


def describe_ide_tool(tool_name: str, tool_input: ToolInput) -> IdeAction:
    """Look up a JetBrains tool and extract its detail."""
    icon, label, priority = TOOL_LABELS.get(tool_name, DEFAULT_LABEL)
    return IdeAction(icon=icon, label=label, priority=priority, detail=extract_detail(tool_input))
