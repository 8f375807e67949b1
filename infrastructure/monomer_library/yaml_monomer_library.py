from __future__ import annotations

from pathlib import Path

import pydantic
import structlog
import yaml

from application.ports.monomer_library import MonomerLibrary
from domain.exceptions import MonomerLibraryError
from domain.value_objects.monomer import Monomer

log = structlog.get_logger(__name__)

DEFAULT_LIBRARY_PATH = Path(__file__).resolve().parent / "default_monomers.yaml"


class YamlMonomerLibrary(MonomerLibrary):
    """MonomerLibrary adapter that reads monomer definitions from a YAML file.

    The document holds a top-level ``monomers`` list; each entry is validated
    into a Monomer. Any unreadable file or malformed entry fails the whole
    load.
    """

    def __init__(self, path: Path = DEFAULT_LIBRARY_PATH) -> None:
        self._path = path

    def load(self) -> list[Monomer]:
        if not self._path.exists():
            msg = f"Monomer library not found: {self._path}"
            raise MonomerLibraryError(msg)

        try:
            with self._path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Monomer library {self._path} is not valid YAML: {e}"
            raise MonomerLibraryError(msg) from e

        if not isinstance(data, dict) or not isinstance(data.get("monomers"), list):
            msg = f"Monomer library {self._path} must contain a 'monomers' list"
            raise MonomerLibraryError(msg)

        monomers = []
        for index, entry in enumerate(data["monomers"]):
            try:
                monomers.append(Monomer.model_validate(entry))
            except pydantic.ValidationError as e:
                msg = f"Invalid monomer entry #{index} in {self._path}: {e}"
                raise MonomerLibraryError(msg) from e

        log.debug("yaml_monomer_library.loaded", path=str(self._path), monomers=len(monomers))
        return monomers
