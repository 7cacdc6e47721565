"""Version state layer.

This package is the single source of truth for which version of each
package was last published and from which content. Only the engine is
allowed to commit new records.
"""
