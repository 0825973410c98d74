from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CHISEL_SBOM_")

    # Document name written into the SPDX `name` field when the CLI is not given one
    document_name: str = "chisel-sbom"
    # Written next to the manifest when no output path is given
    output_filename: str = "manifest.spdx.json"
    namespace_base: str = "https://spdx.org/spdxdocs/chisel-sbom"
    creator_tool: str = "Chisel SBOM Exporter ()"
    supplier_type: str = "Person"
    supplier: str = "Ubuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>"
    log_level: str = "WARNING"


settings = Settings()
