"""External collaborators: the submission store and the postal lookup."""
