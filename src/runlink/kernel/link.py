"""Link metadata models and the signing envelope."""

from typing import Any, Dict, Literal, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from runlink._internal.canonical_json import canonical_bytes
from runlink.kernel.byproducts import Byproducts
from runlink.kernel.hash_algorithms import HashAlgorithm
from runlink.kernel.paths import VirtualTargetPath

Artifacts = Dict[VirtualTargetPath, Dict[HashAlgorithm, bytes]]


def _artifacts_to_dict(artifacts: Artifacts) -> Dict[str, Dict[str, str]]:
    return {
        str(path): {algorithm.value: digest.hex() for algorithm, digest in sorted(hashes.items())}
        for path, hashes in sorted(artifacts.items())
    }


class LinkMetadata(BaseModel):
    """Evidence for one supply-chain step: materials, byproducts, products."""
    type: Literal["link"] = "link"
    name: str
    command: Tuple[str, ...] = ()
    materials: Artifacts = Field(default_factory=dict)
    products: Artifacts = Field(default_factory=dict)
    byproducts: Byproducts
    environment: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Step names identify the link; an empty one is meaningless."""
        if not v:
            raise ValueError("Link name must not be empty")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Interchange form: hex digests, three-key byproducts."""
        return {
            "_type": self.type,
            "name": self.name,
            "command": list(self.command),
            "materials": _artifacts_to_dict(self.materials),
            "products": _artifacts_to_dict(self.products),
            "byproducts": self.byproducts.to_dict(),
            "environment": dict(self.environment),
        }

    def signable_bytes(self) -> bytes:
        return canonical_bytes(self.to_dict())


@runtime_checkable
class Signer(Protocol):
    """Produces signatures over link payloads.

    Key material and signature scheme are the implementation's business.
    """
    keyid: str

    def sign(self, payload: bytes) -> str:
        ...


class Signature(BaseModel):
    keyid: str
    sig: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class Metablock(BaseModel):
    """Envelope holding a link and zero or more signatures.

    A Metablock without signatures is for local inspection only.
    """
    signed: LinkMetadata
    signatures: Tuple[Signature, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def unsigned(cls, link: LinkMetadata) -> "Metablock":
        return cls(signed=link)

    @classmethod
    def signed_by(cls, link: LinkMetadata, signer: Signer) -> "Metablock":
        return cls.unsigned(link).sign(signer)

    @property
    def is_signed(self) -> bool:
        return len(self.signatures) > 0

    def sign(self, signer: Signer) -> "Metablock":
        """Return a copy with one more signature over the link's canonical bytes."""
        signature = Signature(keyid=signer.keyid, sig=signer.sign(self.signed.signable_bytes()))
        return Metablock(signed=self.signed, signatures=self.signatures + (signature,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "signed": self.signed.to_dict(),
            "signatures": [signature.model_dump() for signature in self.signatures],
        }
