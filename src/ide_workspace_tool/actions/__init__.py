"""Concrete workspace actions exposed through the action registry."""

from .branches import CreateBranchAction, GitPushAction, MergeBranchAction, ShowCurrentBranchAction, SwitchBranchAction
from .catalog import build_default_actions
from .commit import AICommitAction, AICommitVariant, GitCommitPushAction
from .open_project import OpenProjectAction, OpenTarget
from .workspace import OpenExplorerAction, ShowWorkspaceAction

__all__ = [
	"AICommitAction",
	"AICommitVariant",
	"CreateBranchAction",
	"GitCommitPushAction",
	"GitPushAction",
	"MergeBranchAction",
	"OpenExplorerAction",
	"OpenProjectAction",
	"OpenTarget",
	"ShowCurrentBranchAction",
	"ShowWorkspaceAction",
	"SwitchBranchAction",
	"build_default_actions",
]
