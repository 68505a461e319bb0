#!/usr/bin/env python

import casadi as ca
import matplotlib.pyplot as plt

from roadmaker import RoadMaker
from roadmaker.plotting import animate_route, render_waypoints



## ----------------------
#  PRINT THE RUNNING PATH
#  ----------------------
import os
# get the current working directory
current_working_directory = os.getcwd()
# print output to the console
print('This script is running from the following path:')
print(current_working_directory)



## -----------------------------------
#  SPECIFY THE PATH FOR SAVING FIGURES
#  -----------------------------------
path_for_saving_figures = 'examples/saved_figures'
os.makedirs(path_for_saving_figures, exist_ok=True)



## -------------------------
#  SPECIFY THE SYMBOLIC ROAD
#  -------------------------

# The road is y = f(x), for x from 0 to road_x_length
x = ca.SX.sym("x")
y = 10.0 * ca.sin(0.04 * x) + 0.002 * x**2

# Setting "plot_flag" opens the curvature and arc length figures
symbolic_road = RoadMaker("symbolic", number_of_lanes=2, lane_width=3.5, function_based_flag=True, dx=0.5, plot_flag=True, road_x_length=150.0, x=x, y=y)

print("Symbolic road: total length = " + "{:.2f}".format(symbolic_road.get_total_length()) + " meters, curvature ratio = " + "{:.3f}".format(symbolic_road.check_curvature()))



## --------------------
#  SPECIFY THE MAP ROAD
#  --------------------

# Specified as a GeoJSON-like route, with (longitude, latitude) pairs in degrees
route = {
    "geometry": {
        "coordinates": [
            [-3.1892, 55.9445],
            [-3.1880, 55.9450],
            [-3.1865, 55.9452],
            [-3.1850, 55.9449],
            [-3.1838, 55.9443],
            [-3.1830, 55.9435],
            [-3.1828, 55.9426],
        ]
    }
}

map_road = RoadMaker("map", number_of_lanes=2, lane_width=3.5, function_based_flag=False, dx=1.0, route=route)

print("Map road: total length = " + "{:.2f}".format(map_road.get_total_length()) + " meters")



## ------------------------------
#  PLOT THE ROADS WITH WAYPOINTS
#  ------------------------------
fig, axs = plt.subplots(1, 2, sharex=False, sharey=False, figsize=(10, 4))

for this_axs, this_road, this_title in zip(axs, [symbolic_road, map_road], ["Symbolic road", "Map road"]):
    this_road.render_road(this_axs)
    waypoint = this_road.waypoint_generator(num_control_points=5, starting_s=0.0, rng=0)
    render_waypoints(this_axs, waypoint)
    this_axs.set_title(this_title, fontsize=12)

fig.savefig(path_for_saving_figures + "/roads_with_waypoints.pdf")
print("Saved figure: " + path_for_saving_figures + "/roads_with_waypoints.pdf")



## -----------------
#  ANIMATE THE ROUTE
#  -----------------
num_frames = animate_route(map_road, zoom_level=14, step_size=20, pause_time=0.05)
print("Animated the route over " + str(num_frames) + " frames")
