#!/usr/bin/env python

import numpy as np

# Relative tolerance when deciding if the end point of a grid is reached
GRID_TOLERANCE = 1e-9



def colon_grid(stop, step):
    """
    Samples the interval [0, stop] at a fixed step, including "stop" when it
    is (up to round-off) a multiple of "step", and never going beyond it.

    Parameters
    ----------
        stop : float
            The end of the interval, must be >= 0.
        step : float
            The spacing of the grid, must be > 0.

    Returns
    -------
        grid : numpy array
            The values k*step, for k = 0, 1, ..., floor(stop/step).
    """
    num_points = int(np.floor(stop / step * (1.0 + GRID_TOLERANCE))) + 1
    return step * np.arange(num_points, dtype=np.float64)



def forward_difference(values, step):
    """
    First-order forward difference, padded with a trailing zero so that the
    result has the same length as the input, i.e., [diff(values)/step, 0].
    """
    values = np.asarray(values, dtype=np.float64)
    return np.append(np.diff(values) / step, 0.0)



def curvature_of_graph(dy_dx, d2y_dx2):
    """Curvature of the graph y = f(x), i.e., y'' / (1 + y'^2)^(3/2)."""
    return d2y_dx2 / (1.0 + dy_dx**2)**1.5



def read_only(values):
    """Returns a float64 copy of the array that can not be written to."""
    values = np.array(values, dtype=np.float64)
    values.flags.writeable = False
    return values
