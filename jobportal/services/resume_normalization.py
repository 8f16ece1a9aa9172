from typing import Any, Dict


NESTED_COLLECTIONS = ("education", "experience", "skills", "languages", "certifications", "projects")


def ensure_list_of_dicts(x: Any) -> list:
    """Coerce input into a list of dicts, dropping anything that is not an object."""
    if x is None:
        return []
    if isinstance(x, dict):
        # maybe stored as single object
        return [x]
    if isinstance(x, list):
        return [item for item in x if isinstance(item, dict)]
    return []


def normalize_personal_info(pi: Any) -> Any:
    if not pi or not isinstance(pi, dict):
        return None
    return pi


def normalize_projects(projects: Any) -> list:
    out = []
    for p in ensure_list_of_dicts(projects):
        # some rows use 'name' instead of 'title'
        if "title" not in p and "name" in p:
            p = {**p, "title": p.get("name")}
        if p.get("display_order") is None:
            p = {**p, "display_order": 0}
        out.append(p)
    return sorted(out, key=lambda p: p.get("display_order") or 0)


def normalize_resume_detail(raw: Any) -> Dict[str, Any]:
    """Normalize a GET /api/resumes/{id} payload into the ResumeDetail shape.

    Nested collections may come back missing, null, or as a single object
    depending on how many rows the resume has; always hand lists onward.
    """
    if not isinstance(raw, dict):
        return {}
    item = dict(raw)
    item["personal_info"] = normalize_personal_info(raw.get("personal_info"))
    for key in NESTED_COLLECTIONS:
        item[key] = ensure_list_of_dicts(raw.get(key))
    item["projects"] = normalize_projects(raw.get("projects"))
    return item
