# routing/route_plot.py

from collections.abc import Sequence

import contextily as cx
import matplotlib.pyplot as plt
from pyproj import Transformer

from passengers.pickup_points import PickupPoint
from routing.nextmv_client import VehicleRoute

ROUTE_COLORS: tuple[str, ...] = (
    'red', 'blue', 'green', 'orange', 'purple', 'brown', 'magenta', 'teal',
)


def _transform_xy_lists(
    xs: list[float],
    ys: list[float],
    src_crs: str = 'EPSG:4326',
    dst_crs: str = 'EPSG:3857',
) -> tuple[list[float], list[float]]:
    """
    Transform coordinate lists between coordinate reference systems.

    Args:
        xs: X coordinates (longitudes for EPSG:4326) in the source CRS.
        ys: Y coordinates (latitudes for EPSG:4326) in the source CRS.
        src_crs: Source CRS string.
        dst_crs: Destination CRS string.

    Returns:
        A tuple (xs_transformed, ys_transformed).
    """
    transformer = Transformer.from_crs(src_crs, dst_crs, always_xy=True)
    xs_t: list[float] = []
    ys_t: list[float] = []
    for x, y in zip(xs, ys):
        x2, y2 = transformer.transform(x, y)
        xs_t.append(float(x2))
        ys_t.append(float(y2))
    return xs_t, ys_t


def route_polyline_lonlat(
    route: VehicleRoute,
    points_by_id: dict[str, PickupPoint],
) -> tuple[list[float], list[float]]:
    """
    Lon/lat polyline of a vehicle route through known pickup points.

    Stop ids that are not pickup points (vehicle start/end markers) are skipped.
    """
    lons: list[float] = []
    lats: list[float] = []
    for stop_id in route.stop_ids:
        point = points_by_id.get(stop_id)
        if point is None:
            continue
        lons.append(float(point.longitude))
        lats.append(float(point.latitude))
    return lons, lats


def make_matplotlib_points_map(
    points: Sequence[PickupPoint],
    *,
    title: str,
    routes: Sequence[VehicleRoute] | None = None,
) -> plt.Figure:
    """
    Make a basemap-backed plot (EPSG:3857) of pickup points, optionally with
    one polyline per vehicle route.

    Args:
        points: Pickup points in WGS84.
        title: Plot title.
        routes: Optional vehicle routes whose stop ids refer to `points`.

    Returns:
        Matplotlib Figure.

    Raises:
        ValueError: If there are no points.
    """
    if not points:
        raise ValueError('No points to plot.')

    xs, ys = _transform_xy_lists(
        [float(p.longitude) for p in points],
        [float(p.latitude) for p in points],
    )

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_title(title)
    ax.scatter(xs, ys, s=40, color='black', zorder=3)

    for i, (x, y) in enumerate(zip(xs, ys), start=1):
        ax.text(x, y, str(i), fontsize=9, color='black')

    points_by_id = {str(p.id): p for p in points}
    for k, route in enumerate(routes or []):
        lons, lats = route_polyline_lonlat(route, points_by_id)
        if len(lons) < 2:
            continue
        rxs, rys = _transform_xy_lists(lons, lats)
        ax.plot(
            rxs,
            rys,
            '-',
            linewidth=2,
            color=ROUTE_COLORS[k % len(ROUTE_COLORS)],
            label=route.vehicle_id,
        )

    if routes:
        ax.legend(loc='upper right', fontsize=8)

    x_min, x_max = min(xs), max(xs)
    y_min, y_max = min(ys), max(ys)

    cx0 = 0.5 * (x_min + x_max)
    cy0 = 0.5 * (y_min + y_max)

    half_range = 0.5 * max(x_max - x_min, y_max - y_min)
    half_range = max(half_range, 300.0)
    pad = max(0.10 * (2.0 * half_range), 50.0)

    ax.set_xlim(cx0 - half_range - pad, cx0 + half_range + pad)
    ax.set_ylim(cy0 - half_range - pad, cy0 + half_range + pad)

    cx.add_basemap(ax, crs='EPSG:3857', source=cx.providers.OpenStreetMap.Mapnik)

    ax.set_aspect('equal', adjustable='box')
    ax.axis('off')
    return fig
