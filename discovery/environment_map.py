"""Index of environments, hostnames and environment groups"""
from typing import Dict, List, Optional, Tuple, Iterable
from models.apigee_models import EnvironmentGroup, EnvironmentGroupAttachment


class EnvironmentMap:
    """Maps environments to hostnames and hostnames to environment groups.

    An environment reaches its hostnames through the groups it is attached to.
    Lookups return ``None`` on a miss and leave it to the caller to decide
    whether that is worth a warning.
    """

    def __init__(self, org: str):
        self.org = org
        self._hostnames: Dict[str, List[str]] = {}
        self._envgroups: Dict[str, str] = {}

    @classmethod
    def build(cls, org: str,
              groups: Iterable[Tuple[EnvironmentGroup, List[EnvironmentGroupAttachment]]]) -> "EnvironmentMap":
        """Build from environment groups paired with their attachments, in fetch order"""
        env_map = cls(org)
        for group, attachments in groups:
            env_map.add_group(group, attachments)
        return env_map

    def add_group(self, group: EnvironmentGroup, attachments: List[EnvironmentGroupAttachment]):
        group_path = f"organizations/{self.org}/envgroups/{group.name}"
        for hostname in group.hostnames:
            self._envgroups.setdefault(hostname, group_path)
        for attachment in attachments:
            self._hostnames.setdefault(attachment.environment, []).extend(group.hostnames)

    def hostnames(self, environment: str) -> Optional[List[str]]:
        """Hostnames serving an environment, or None if it is attached to no group"""
        hostnames = self._hostnames.get(environment)
        if hostnames is None:
            return None
        return list(hostnames)

    def envgroup(self, hostname: str) -> Optional[str]:
        """Fully-qualified environment group that owns a hostname"""
        return self._envgroups.get(hostname)
