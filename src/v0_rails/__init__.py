"""
v0-rails Package.

Converts React components written in JSX/TSX into Rails ViewComponents: a Ruby
class, an ERB template and, optionally, a Stimulus controller, a component test, a
preview and a view helper.

Usage
-----

.. code-block:: python

    import v0_rails

    files = v0_rails.convert(source, path="Card.jsx")
    print(files["template"])
"""

from typing import Dict, Optional

from v0_rails.config import RuntimeConfig
from v0_rails.core.engine import Artifacts, TransformEngine
from v0_rails.core.model import IR

__version__ = "0.1.0"


def convert(source: str, path: str = "Component.jsx", config: Optional[RuntimeConfig] = None) -> Dict[str, str]:
  """
  Converts the source of one component file.

  Args:
      source (str): JSX or TSX source code.
      path (str): File name; the suffix selects the grammar.
      config (RuntimeConfig, optional): Options; defaults if None.

  Returns:
      Dict[str, str]: Artifact contents keyed by kind (``component``, ``template``, ...).

  Raises:
      ExtractionError: If the source contains no component.
  """
  engine = TransformEngine(config)
  return engine.render(engine.to_ir(source, path=path)).as_dict()


__all__ = [
  "Artifacts",
  "IR",
  "RuntimeConfig",
  "TransformEngine",
  "convert",
  "__version__",
]
