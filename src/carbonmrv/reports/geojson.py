"""GeoJSON export of located submissions for map views."""

from carbonmrv.data.models import SubmissionSummary


def submissions_to_geojson(summaries: list[SubmissionSummary]) -> dict:
    """
    Build a FeatureCollection with one Point per located submission.

    Submissions without a GPS location are skipped.
    """
    features = []
    for s in summaries:
        location = s.get("location")
        if location is None:
            continue
        features.append(
            {
                "type": "Feature",
                "id": s["id"],
                "geometry": {
                    "type": "Point",
                    "coordinates": [location.longitude, location.latitude],
                },
                "properties": {
                    "farm_name": s["farm_name"],
                    "farmer_name": s["farmer_name"],
                    "crop_type": s["crop_type"],
                    "land_size": s["land_size"],
                    "carbon_credits": s["carbon_credits"],
                    "confidence_score": s["confidence_score"],
                    "status": s["status"],
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}
