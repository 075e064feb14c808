"""Loading sprite metadata from a client game configuration.

Reads the `sprites` table (asset key -> sprite path) and the
`entities.<key>.render.rect` dimensions. When a rect is missing, the sprite
image header is probed with Pillow; failing that the 32x32 default stands.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from ..diagnostics import Diagnostics, DiagnosticKind
from ..registry.loaders import GameConfigFileLoader
from ..registry.models import ENTITIES_KEY, RECT_KEY, RENDER_KEY, SPRITES_KEY
from .models import AssetInfo, AssetRegistry


@dataclass
class AssetLoadResult:
    """Asset registry loaded from a client configuration."""

    assets: AssetRegistry = field(default_factory=dict)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class AssetRegistryLoader:
    """Builds an AssetRegistry from a client configuration file."""

    def __init__(self, loader: Optional[GameConfigFileLoader] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.loader = loader or GameConfigFileLoader()

    def load_assets(
        self, client_config_path: str | Path, base_dir: Optional[str | Path] = None
    ) -> AssetLoadResult:
        """Load sprite paths and sizes.

        Args:
            client_config_path: Path to the client configuration JSON
            base_dir: Directory relative sprite paths are resolved against
                when probing image sizes (default: current directory)

        Returns:
            AssetLoadResult; empty with a REGISTRY_LOAD_FAILED diagnostic when
            the configuration cannot be read
        """
        diagnostics = Diagnostics()
        read = self.loader.read(client_config_path)
        if not read.ok or read.data is None:
            diagnostics.report(
                self.logger,
                DiagnosticKind.REGISTRY_LOAD_FAILED,
                read.error or f"Cannot load assets from {client_config_path}",
            )
            return AssetLoadResult(diagnostics=diagnostics)

        assets: AssetRegistry = {}
        sprites = read.data.get(SPRITES_KEY)
        if isinstance(sprites, dict):
            for key, sprite_path in sprites.items():
                if isinstance(sprite_path, str):
                    assets[str(key)] = AssetInfo(sprite_path=sprite_path)
                else:
                    self.logger.warning(
                        f"Sprite '{key}' has a non-string path {sprite_path!r}, skipped"
                    )

        sized: set[str] = set()
        entities = read.data.get(ENTITIES_KEY)
        if isinstance(entities, dict):
            for key, entity in entities.items():
                info = assets.get(str(key))
                if info is None:
                    continue
                if self._apply_render_rect(info, entity):
                    sized.add(str(key))

        root = Path(base_dir) if base_dir is not None else Path.cwd()
        for key, info in assets.items():
            if key in sized:
                continue
            size = self.probe_image_size(root / info.sprite_path)
            if size is not None:
                info.width, info.height = size

        self.logger.info(f"Loaded {len(assets)} assets from {read.path}")
        return AssetLoadResult(assets=assets, diagnostics=diagnostics)

    @staticmethod
    def _apply_render_rect(info: AssetInfo, entity: Any) -> bool:
        """Copy `render.rect.w/h` into info. Returns True if any was set."""
        if not isinstance(entity, dict):
            return False
        render = entity.get(RENDER_KEY)
        if not isinstance(render, dict):
            return False
        rect = render.get(RECT_KEY)
        if not isinstance(rect, dict):
            return False

        applied = False
        width = rect.get("w")
        height = rect.get("h")
        if isinstance(width, (int, float)) and not isinstance(width, bool):
            info.width = int(width)
            applied = True
        if isinstance(height, (int, float)) and not isinstance(height, bool):
            info.height = int(height)
            applied = True
        return applied

    def probe_image_size(self, image_path: Path) -> Optional[Tuple[int, int]]:
        """Return (width, height) of an image file without decoding pixels."""
        if not image_path.is_file():
            self.logger.debug(f"Sprite not found for size probe: {image_path}")
            return None
        try:
            with Image.open(image_path) as image:
                return image.size
        except (OSError, UnidentifiedImageError) as e:
            self.logger.warning(f"Cannot read sprite size from {image_path}: {e}")
            return None
