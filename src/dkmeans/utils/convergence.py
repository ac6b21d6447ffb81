"""
Convergence criteria for clustering algorithms.

K-means has converged once a full assignment round leaves every element in
the cluster it already belonged to.
"""

from typing import Dict, Any

from ..base.interfaces import ConvergenceCriterion


class ChangeInAssignments(ConvergenceCriterion):
    """Convergence when a round produces no membership change.

    The state passed to ``check`` carries either ``changed`` (a boolean, as
    voted by the workers) or ``n_changed`` (a count, as seen by a single
    process).
    """

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments have stabilized."""
        if 'changed' in current_state:
            changed = bool(current_state['changed'])
            n_changed = current_state.get('n_changed')
        else:
            n_changed = int(current_state['n_changed'])
            changed = n_changed > 0

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'changed': changed,
            'n_changed': n_changed
        })

        return not changed
