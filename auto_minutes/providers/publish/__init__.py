"""Render/publish targets for assembled minutes.

- MarkdownSitePublisher -- implements IPublisher; writes the Eleventy site
  source tree (pages, raw ``.txt`` copies, meeting and root indexes).
- GitPagesDeployer -- pushes an assembled site tree to a pages branch.
"""

from auto_minutes.providers.publish.git_pages_deployer import GitPagesDeployer
from auto_minutes.providers.publish.markdown_site_publisher import MarkdownSitePublisher

__all__ = ["GitPagesDeployer", "MarkdownSitePublisher"]
