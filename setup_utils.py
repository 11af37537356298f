from pathlib import Path
from typing import List, Optional, Union


def load_requirements(file_list: Optional[Union[str, List[str]]] = None) -> List[str]:
    """Requirement specifiers listed in `file_list`, following `-r` includes."""
    if file_list is None:
        file_list = ["requirements/base.in"]
    if isinstance(file_list, str):
        file_list = [file_list]
    requirements: List[str] = []
    for file in file_list:
        path = Path(file)
        file_dir = path.parent.resolve()
        with open(file, encoding="utf-8") as f:
            raw = [line.strip() for line in f.read().splitlines()]
            requirements.extend(
                [r for r in raw if r and not r.startswith("#") and not r.startswith("-")]
            )
            recursive_reqs = [r for r in raw if r.startswith("-r")]
            if recursive_reqs:
                filenames = [
                    str((file_dir / recursive_req.split()[-1]).resolve())
                    for recursive_req in recursive_reqs
                ]
                requirements.extend(load_requirements(file_list=filenames))
    return sorted(set(requirements))
