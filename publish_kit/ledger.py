"""
Owner-action ledger: admin calls the deployer could not make itself,
queued for the owner account to execute later.
"""
from rich.markup import escape

from publish_kit.sources import write_json
from publish_kit.cli.style import print_status


class OwnerActionLedger:
    """
    Owns the in-memory ledger and the file backing it.

    Every ``record`` rewrites the whole file. Recording an existing key
    replaces the previous entry.
    """

    def __init__(self, owner_actions: dict, owner_actions_file: str, explorer_link_prefix: str):
        self.owner_actions = owner_actions
        self.owner_actions_file = owner_actions_file
        self.explorer_link_prefix = explorer_link_prefix

    @classmethod
    def from_sources(cls, sources, explorer_link_prefix: str):
        return cls(sources.owner_actions, sources.owner_actions_file, explorer_link_prefix)

    def __len__(self):
        return len(self.owner_actions)

    def __contains__(self, key):
        return key in self.owner_actions

    def link_for(self, target: str) -> str:
        return f"{self.explorer_link_prefix}/address/{target}#writeContract"

    def record(self, key: str, action: str, target: str, data=None) -> dict:
        entry = {
            "target": target,
            "action": action,
            "complete": False,
            "link": self.link_for(target),
            "data": data,
        }
        previous = self.owner_actions.get(key)
        self.owner_actions[key] = entry
        try:
            self.save()
        except TypeError:
            # unserializable payload: keep memory in step with the file
            if previous is None:
                del self.owner_actions[key]
            else:
                self.owner_actions[key] = previous
            raise
        print_status(f"Cannot invoke {escape(key)} as not owner. Appended to actions.", level="highlight")
        return entry

    def pending(self) -> dict:
        return {key: entry for key, entry in self.owner_actions.items() if not entry.get("complete")}

    def mark_complete(self, key: str):
        if key not in self.owner_actions:
            raise KeyError(key)
        self.owner_actions[key]["complete"] = True
        self.save()

    def save(self):
        write_json(self.owner_actions_file, self.owner_actions)
