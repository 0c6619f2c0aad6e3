import numpy as np
from sklearn.utils import check_random_state


def as_random_state(random_state=None) -> np.random.RandomState:
    """
    Turn `random_state` into a RandomState instance.

    None gives a fresh RandomState seeded from OS entropy, so unseeded calls
    never read or advance numpy's global generator. Ints and RandomState
    instances are handled by sklearn's `check_random_state`.
    """
    if random_state is None:
        return np.random.RandomState()
    return check_random_state(random_state)
