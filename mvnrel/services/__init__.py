"""Release services: tool checks, Maven and the git-flow workflow."""
