"""System-wide constants. All magic numbers and strings live here."""

from __future__ import annotations

# ── Service ──────────────────────────────────────────────────────
SERVICE_NAME = "LinkIQ Backend API"
API_VERSION = "1.0.0"

# ── Passwords ────────────────────────────────────────────────────
BCRYPT_ROUNDS = 10
BCRYPT_MAX_PASSWORD_BYTES = 72      # bcrypt ignores anything past this
GENERATED_PASSWORD_BYTES = 18

# ── Tokens ───────────────────────────────────────────────────────
TOKEN_EXPIRY_DAYS = 30

# ── Quotas ───────────────────────────────────────────────────────
FREE_ACCOUNTS_PER_IP = 2
UNLIMITED_PROJECTS = 999_999

# ── Row Defaults ─────────────────────────────────────────────────
URL_STATUS_ACTIVE = "active"
BACKLINK_STATUS_ACTIVE = "active"
CAMPAIGN_STATUS_DRAFT = "draft"

# ── User-facing messages (pt-BR) ─────────────────────────────────
MSG_HEALTH = "🚀 LinkIQ Backend API está rodando!"

MSG_SIGNUP_MISSING_FIELDS = "Email e nome são obrigatórios"
MSG_EMAIL_TAKEN = "Email já cadastrado"
MSG_IP_LIMIT = (
    "⚠️ Limite atingido: Máximo {limit} contas gratuitas por IP.\n\n"
    "💎 Faça upgrade para o plano STARTER (R$ 97/mês) para criar mais projetos!"
)
MSG_SIGNUP_OK = "Conta criada com sucesso!"
MSG_SIGNUP_FAILED = "Erro ao criar conta"

MSG_LOGIN_MISSING_FIELDS = "Email e senha são obrigatórios"
MSG_INVALID_CREDENTIALS = "Credenciais inválidas"
MSG_LOGIN_OK = "Login realizado com sucesso!"
MSG_LOGIN_FAILED = "Erro ao fazer login"

MSG_TOKEN_MISSING = "Token não fornecido"
MSG_TOKEN_INVALID = "Token inválido"

MSG_USER_NOT_FOUND = "Usuário não encontrado"
MSG_PROFILE_FAILED = "Erro ao buscar perfil"
MSG_PROFILE_NAME_REQUIRED = "Nome é obrigatório"
MSG_PROFILE_UPDATED = "Perfil atualizado com sucesso!"
MSG_PROFILE_UPDATE_FAILED = "Erro ao atualizar perfil"

MSG_API_KEY_MISSING_FIELDS = "Tipo e valor da chave são obrigatórios"
MSG_API_KEY_UNKNOWN_TYPE = "Tipo de chave inválido. Use: {types}"
MSG_API_KEY_SAVED = "API Key salva com sucesso!"
MSG_API_KEY_SAVE_FAILED = "Erro ao salvar API key"
MSG_API_KEY_STATUS_FAILED = "Erro ao buscar status das API keys"

MSG_PROJECT_MISSING_FIELDS = "Nome e domínio são obrigatórios"
MSG_PROJECT_LIMIT = "Limite de projetos atingido para o plano {plan}. Faça upgrade!"
MSG_UNKNOWN_PLAN = "Plano desconhecido: {plan}. Entre em contato com o suporte."
MSG_PROJECT_CREATED = "Projeto criado com sucesso!"
MSG_PROJECT_FAILED = "Erro ao criar projeto"

MSG_INVALID_PAYLOAD = "Dados inválidos"
MSG_INTERNAL_ERROR = "Erro interno do servidor"
