from turnos.integrations.aws.secrets_manager import SecretsManagerClient

__all__ = ["SecretsManagerClient"]
