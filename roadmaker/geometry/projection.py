#!/usr/bin/env python

import numpy as np

from roadmaker.geometry.errors import ProjectionDomainError

# WGS84 semi-major axis, used as the radius of the sphere (units: m)
EARTH_RADIUS = 6378137.0



class MercatorProjection:
    """
    A spherical Mercator projection, referenced to the origin meridian and
    the equator, mapping geographic coordinates (in degrees) to planar
    coordinates (in meters) and back.

    The projection is conformal, hence local angles (and therefore the
    heading of a route) are preserved. Distances are stretched by a factor
    of 1/cos(latitude), which is a good approximation only for routes of
    short-to-moderate extent.

    Coordinates outside the domain of the projection are NOT clipped nor
    wrapped, instead a ProjectionDomainError is raised:
    - latitude  : must satisfy |latitude| < 90 degrees (the poles map to infinity).
    - longitude : must satisfy |longitude| <= 180 degrees.
    - x         : must satisfy |x| <= pi * radius.
    """

    def __init__(self, radius=EARTH_RADIUS):
        """
        Parameters
        ----------
            radius : float
                The radius of the sphere (units: m).
        """
        if not (np.isfinite(radius) and radius > 0):
            raise ProjectionDomainError("The projection radius must be a finite positive value, radius = " + str(radius))
        self.radius = float(radius)

    def forward(self, latitude, longitude):
        """
        Projects geographic coordinates to planar coordinates.

        Parameters
        ----------
            latitude : float or numpy array
                Latitude of each point (units: degrees).
            longitude : float or numpy array
                Longitude of each point, same shape as latitude (units: degrees).

        Returns
        -------
            x : numpy array
                Easting of each point (units: m).
            y : numpy array
                Northing of each point (units: m).
        """
        latitude  = np.asarray(latitude,  dtype=np.float64)
        longitude = np.asarray(longitude, dtype=np.float64)

        if (latitude.shape != longitude.shape):
            raise ProjectionDomainError("Latitude and longitude must have the same shape, got " + str(latitude.shape) + " and " + str(longitude.shape))
        if not (np.all(np.isfinite(latitude)) and np.all(np.isfinite(longitude))):
            raise ProjectionDomainError("Latitude and longitude must be finite.")
        if np.any(np.abs(latitude) >= 90.0):
            raise ProjectionDomainError("Latitude must be strictly between -90 and 90 degrees, max |latitude| = " + str(np.max(np.abs(latitude))))
        if np.any(np.abs(longitude) > 180.0):
            raise ProjectionDomainError("Longitude must be between -180 and 180 degrees, max |longitude| = " + str(np.max(np.abs(longitude))))

        phi    = np.deg2rad(latitude)
        lambda_ = np.deg2rad(longitude)

        x = self.radius * lambda_
        y = self.radius * np.log(np.tan(0.25*np.pi + 0.5*phi))
        return x, y

    def inverse(self, x, y):
        """
        Recovers geographic coordinates from planar coordinates.

        Parameters
        ----------
            x : float or numpy array
                Easting of each point (units: m).
            y : float or numpy array
                Northing of each point, same shape as x (units: m).

        Returns
        -------
            latitude : numpy array
                (units: degrees)
            longitude : numpy array
                (units: degrees)
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        if (x.shape != y.shape):
            raise ProjectionDomainError("x and y must have the same shape, got " + str(x.shape) + " and " + str(y.shape))
        if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
            raise ProjectionDomainError("Planar coordinates must be finite.")
        if np.any(np.abs(x) > np.pi * self.radius):
            raise ProjectionDomainError("Easting is beyond +/- pi * radius, max |x| = " + str(np.max(np.abs(x))))

        latitude  = np.rad2deg(2.0 * np.arctan(np.exp(y / self.radius)) - 0.5*np.pi)
        longitude = np.rad2deg(x / self.radius)
        return latitude, longitude
