"""Mesh checks for generated solids."""

import numpy as np
import trimesh
from manifold3d import Manifold


def manifold_to_trimesh(solid: Manifold) -> trimesh.Trimesh:
    """Convert a Manifold to a trimesh.Trimesh with shared vertices.

    Uses vert_properties[:, :3] for vertices and tri_verts for faces.
    """
    mesh = solid.to_mesh()
    vertices = np.array(mesh.vert_properties[:, :3], dtype=np.float64)
    faces = np.array(mesh.tri_verts, dtype=np.int32)
    return trimesh.Trimesh(vertices=vertices, faces=faces, process=False)


def validate_solid(solid: Manifold, expected_volume: float | None = None) -> dict:
    """Run the validation checklist on a generated solid.

    Returns a dict with check results and overall pass/fail.
    """
    results = {}

    if solid.is_empty():
        return {"empty": True, "pass": False}
    results["empty"] = False

    tmesh = manifold_to_trimesh(solid)

    # 1. Watertight
    results["is_watertight"] = bool(tmesh.is_watertight)

    # 2. Positive volume
    vol = float(tmesh.volume)
    results["volume"] = vol
    results["positive_volume"] = vol > 0

    # 3. Matches the volume the caller computed analytically
    if expected_volume is not None:
        results["volume_matches"] = bool(
            np.isclose(vol, expected_volume, rtol=1e-4, atol=1e-6)
        )

    # 4. No degenerate triangles
    results["no_degenerate_triangles"] = bool(np.all(tmesh.area_faces > 1e-10))

    results["triangle_count"] = len(tmesh.faces)

    critical_checks = ["is_watertight", "positive_volume"]
    if expected_volume is not None:
        critical_checks.append("volume_matches")
    results["pass"] = all(results.get(c, False) for c in critical_checks)

    return results
