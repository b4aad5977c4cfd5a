"""Provision git worktrees for parallel branches and seed them from an existing checkout."""
