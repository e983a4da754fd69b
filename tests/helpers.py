from gdpglobe.model.records import BoundaryFeature

# Rotation that puts (-90, 37.5), the middle of the USA square, at the canvas center
USA_VIEW = (90.0, -37.5, 0.0)


def square_feature(code, name, lon0, lon1, lat0, lat1):
    return BoundaryFeature.from_geojson({
        "type": "Feature",
        "id": code,
        "properties": {"name": name},
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[lon0, lat0], [lon1, lat0], [lon1, lat1], [lon0, lat1], [lon0, lat0]]],
        },
    })
