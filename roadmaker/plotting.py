#!/usr/bin/env python

import numpy as np
import matplotlib.pyplot as plt

from roadmaker.geometry.interpolants import heading_from_gradient



def lane_boundary_offsets(number_of_lanes, lane_width):
    """
    Lateral offsets of the lane boundaries from the centerline, from the
    outermost boundary on one side to the outermost on the other side,
    i.e., number_of_lanes+1 values (units: m).
    """
    return (np.arange(number_of_lanes + 1) - 0.5 * number_of_lanes) * lane_width



def lane_boundaries(road):
    """
    Coordinates of each lane boundary of the road.

    Returns
    -------
        x_bounds, y_bounds : numpy arrays
            With shape number of boundaries -by- number of samples (units: m).
    """
    geometry = road.geometry
    theta_bound = heading_from_gradient(geometry.x_vec, geometry.y_vec, road.dx)
    d_line_vec = lane_boundary_offsets(road.number_of_lanes, road.lane_width)
    x_bounds = geometry.x_vec[np.newaxis,:] + d_line_vec[:,np.newaxis] * np.sin(theta_bound)[np.newaxis,:]
    y_bounds = geometry.y_vec[np.newaxis,:] - d_line_vec[:,np.newaxis] * np.cos(theta_bound)[np.newaxis,:]
    return x_bounds, y_bounds



def render_road(axis_handle, road):
    """
    Plot the road, with asphalt between the outer boundaries, dashed lines
    between the lanes, and solid outer boundaries.

    Parameters
    ----------
        axis_handle : matplotlib.axes
            A handle for where the road is plotted.
        road : RoadMaker
            The road to plot.

    Returns
    -------
        plot_handles : list
            The handles of the fill and of the lines that are plotted.
    """
    x_bounds, y_bounds = lane_boundaries(road)
    plot_handles = []

    # Asphalt
    plot_handles.extend( axis_handle.fill(
        np.concatenate((x_bounds[0,:], x_bounds[-1,::-1])),
        np.concatenate((y_bounds[0,:], y_bounds[-1,::-1])),
        facecolor=(0.4,0.4,0.4), edgecolor="none",
    ) )

    # Dashed lines between the lanes
    for j in range(1, x_bounds.shape[0]-1):
        plot_handles.extend( axis_handle.plot(x_bounds[j,:], y_bounds[j,:], color=(1.0,0.84,0.0), linewidth=0.5, linestyle="--") )

    # Outer bounds
    plot_handles.extend( axis_handle.plot(x_bounds[0,:],  y_bounds[0,:],  color="k", linewidth=2.0) )
    plot_handles.extend( axis_handle.plot(x_bounds[-1,:], y_bounds[-1,:], color="k", linewidth=2.0) )

    axis_handle.set_xlabel('X [meters]', fontsize=10)
    axis_handle.set_ylabel('Y [meters]', fontsize=10)
    axis_handle.set_aspect('equal', adjustable='box')

    return plot_handles



def render_waypoints(axis_handle, waypoint):
    """Plot waypoints as a thin line with markers, returns the line handles."""
    return axis_handle.plot(waypoint.x, waypoint.y, color="red", linewidth=0.5, marker="o", markersize=1)



def plot_curvature_comparison(road):
    """
    Plot the curvature of a symbolic road computed from finite differences
    and from the exact derivatives. The last two samples are not plotted,
    as the finite differences are padded there.

    Returns
    -------
        fig : matplotlib.figure.Figure
    """
    geometry = road.geometry
    estimates = geometry.estimates

    fig, axs = plt.subplots(1, 1, sharex=False, sharey=False, gridspec_kw={"left":0.15, "right": 0.95, "top":0.92,"bottom":0.18})
    axs.plot(geometry.x_vec[:-2], estimates.kappa_numeric[:-2], label=r"$\kappa(x)$, Numerical", color="b", linewidth=3)
    axs.plot(geometry.x_vec[:-2], estimates.kappa_exact[:-2],   label=r"$\kappa(x)$, Exact",     color="r", linewidth=1, linestyle="--")
    axs.set_xlabel('x [meters]', fontsize=10)
    axs.set_ylabel('Curvature [1/meters]', fontsize=10)
    axs.grid(visible=True, which="both", axis="both", linestyle='--')
    axs.legend()
    fig.suptitle("Function " + str(road.spec.symbolic), fontsize=12)
    return fig



def plot_arc_length(road):
    """
    Plot the arc length s(x) of a symbolic road.

    Returns
    -------
        fig : matplotlib.figure.Figure
    """
    geometry = road.geometry
    fig, axs = plt.subplots(1, 1, sharex=False, sharey=False, gridspec_kw={"left":0.15, "right": 0.95, "top":0.92,"bottom":0.18})
    axs.plot(geometry.x_vec, geometry.s_vec, label=r"$s(x)$", color="b", linewidth=3)
    axs.set_xlabel('x [meters]', fontsize=10)
    axs.set_ylabel('Traveled distance [meters]', fontsize=10)
    axs.grid(visible=True, which="both", axis="both", linestyle='--')
    axs.legend()
    fig.suptitle("Function " + str(road.spec.symbolic), fontsize=12)
    return fig



def animate_route(road, zoom_level, step_size=None, pause_time=0.1, axis_handle=None):
    """
    Animates a map road: plots the whole route in (longitude, latitude) and
    moves a marker along it, every "step_size" samples. The view is centred
    on the marker, with a half-span of 180/2^zoom_level degrees.

    Parameters
    ----------
        road : RoadMaker
            A road of "map" type.
        zoom_level : float
            Must be > 0.
        step_size : int [OPTIONAL]
            Number of samples per frame, defaults to round(1/dx).
        pause_time : float
            Delay between frames (units: s).
        axis_handle : matplotlib.axes [OPTIONAL]
            Where to animate, a new figure is opened if not provided.

    Returns
    -------
        num_frames : int
            The number of frames that were drawn.
    """
    # Validates the road type and parameters before opening any figure
    positions = road.iter_route_positions(zoom_level, step_size, pause_time)
    latitude, longitude = road.get_high_res_coordinates()

    if (axis_handle is None):
        fig, axis_handle = plt.subplots(1, 1)
    else:
        fig = axis_handle.figure

    axis_handle.plot(longitude, latitude, color="b", linewidth=2)
    axis_handle.set_xlabel('Longitude [degrees]', fontsize=10)
    axis_handle.set_ylabel('Latitude [degrees]', fontsize=10)
    marker_handle, = axis_handle.plot([], [], color="r", marker="o", markersize=8, linestyle="none")

    half_span = 180.0 / 2.0**zoom_level
    num_frames = 0
    for this_latitude, this_longitude in positions:
        marker_handle.set_data([this_longitude], [this_latitude])
        axis_handle.set_xlim(this_longitude - half_span, this_longitude + half_span)
        axis_handle.set_ylim(this_latitude  - half_span, this_latitude  + half_span)
        if (pause_time > 0):
            plt.pause(pause_time)
        else:
            fig.canvas.draw_idle()
        num_frames = num_frames + 1

    return num_frames
