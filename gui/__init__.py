from gui.app import TriSolverApp

__all__ = ["TriSolverApp"]
