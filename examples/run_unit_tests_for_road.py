#!/usr/bin/env python

import casadi as ca

from roadmaker import RoadMaker
from unit_tests.road_unit_tests import plot_waypoints_for_many_seeds
from unit_tests.road_unit_tests import plot_curvature_convergence



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



## ----------------
#  SPECIFY THE ROAD
#  ----------------

# A gently winding road, given as y = f(x)
x = ca.SX.sym("x")
y = 15.0 * ca.sin(0.05 * x)

road = RoadMaker("symbolic", number_of_lanes=3, lane_width=3.5, function_based_flag=True, dx=0.5, road_x_length=200.0, x=x, y=y)


## ------------------------------------
#  TEST THE WAYPOINTS STAY IN THE LANES
#  ------------------------------------

# Specify the path for saving the figure
waypoints_figure_path_and_name = path_for_saving_figures + "/road_test_of_waypoints.pdf"
plot_waypoints_for_many_seeds(road, waypoints_figure_path_and_name, num_seeds=10, num_control_points=6, starting_s=20.0)


## ------------------------------------
#  TEST THE CURVATURE CONVERGENCE
#  ------------------------------------

# Specify the path for saving the figure
curvature_figure_path_and_name = path_for_saving_figures + "/road_test_of_curvature_convergence.pdf"
plot_curvature_convergence(lambda x: 15.0 * ca.sin(0.05 * x), 200.0, [2.0, 1.0, 0.5, 0.25, 0.1], curvature_figure_path_and_name)
