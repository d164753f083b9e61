"""Response-file expansion.

An argument of the form ``@path`` is replaced by the arguments read from
*path*, recursively, until no more references resolve or the budget in
``ExpandConfig.iteration_limit`` runs out.
"""
