# app/shared/utils/input_validation.py

import re
from typing import Optional, Tuple


class InputValidator:
    """
    Validações e sanitizações que complementam o Pydantic.

    Os métodos `validate_*` retornam a tupla (válido, mensagem_erro) para
    que os validadores dos dtos decidam como reportar o erro.
    """

    MAX_NAME_LENGTH = 100
    MAX_PASSWORD_LENGTH = 72  # Limite do bcrypt
    MAX_EMAIL_LENGTH = 255
    MAX_STRING_INPUT_LENGTH = 255
    CNPJ_DIGITS = 14
    CPF_DIGITS = 11

    # Letras (inclusive acentuadas), dígitos, espaço, hífen, apóstrofo e ponto
    NAME_PATTERN = re.compile(r'^[A-Za-zÀ-ÖØ-öø-ÿ0-9\s\-\'\.]+$')
    EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
    # Separadores aceitos em CNPJ/CPF formatados
    DOCUMENT_SEPARATORS = re.compile(r'[\s./-]')
    DANGEROUS_CHARS = re.compile(r'[<>\'";%{}\[\]]')

    @classmethod
    def validate_name(cls, name: str) -> Tuple[bool, Optional[str]]:
        """Nome de exibição: não vazio, limitado e sem caracteres de injeção."""
        if not name or not name.strip():
            return False, "Nome não pode estar vazio"
        if len(name) > cls.MAX_NAME_LENGTH:
            return False, f"Nome é muito longo (máximo {cls.MAX_NAME_LENGTH} caracteres)"
        if cls.DANGEROUS_CHARS.search(name) or not cls.NAME_PATTERN.match(name):
            return False, "Nome contém caracteres não permitidos"
        return True, None

    @classmethod
    def sanitize_name(cls, name: str) -> str:
        # Colapsa espaços internos
        return re.sub(r'\s+', ' ', name.strip())[:cls.MAX_NAME_LENGTH]

    @classmethod
    def validate_password(cls, password: str) -> Tuple[bool, Optional[str]]:
        """
        Valida apenas o limite de tamanho aceito pelo bcrypt.

        Não há regra de força: a senha inicial é uma conveniência.
        """
        if not password:
            return False, "Senha não pode estar vazia"

        if len(password.encode("utf-8")) > cls.MAX_PASSWORD_LENGTH:
            return False, f"Senha é muito longa (máximo {cls.MAX_PASSWORD_LENGTH} bytes)"

        return True, None

    @classmethod
    def validate_email(cls, email: str) -> Tuple[bool, Optional[str]]:
        if not email:
            return False, "Email não pode estar vazio"
        if len(email) > cls.MAX_EMAIL_LENGTH:
            return False, f"Email é muito longo (máximo {cls.MAX_EMAIL_LENGTH} caracteres)"
        if not cls.EMAIL_PATTERN.match(email):
            return False, "Formato de email inválido"
        return True, None

    @classmethod
    def only_digits(cls, document: str) -> str:
        """Remove separadores de um documento formatado (CNPJ/CPF)."""
        return cls.DOCUMENT_SEPARATORS.sub('', document)

    @classmethod
    def _validate_document(cls, document: str, label: str, size: int) -> Tuple[bool, Optional[str]]:
        if not document or not document.strip():
            return False, f"{label} não pode estar vazio"

        digits = cls.only_digits(document)
        if not digits.isdigit() or len(digits) != size:
            return False, f"{label} deve conter {size} dígitos"

        return True, None

    @classmethod
    def validate_cnpj(cls, cnpj: str) -> Tuple[bool, Optional[str]]:
        """
        Valida a quantidade de dígitos de um CNPJ.

        Aceita o número com ou sem máscara (ex: 11.111.111/0001-11).
        Dígitos verificadores não são conferidos.

        Returns:
            Tupla (válido, mensagem_erro)
        """
        return cls._validate_document(cnpj, "CNPJ", cls.CNPJ_DIGITS)

    @classmethod
    def validate_cpf(cls, cpf: str) -> Tuple[bool, Optional[str]]:
        """
        Valida a quantidade de dígitos de um CPF.

        Aceita o número com ou sem máscara (ex: 123.456.789-09).

        Returns:
            Tupla (válido, mensagem_erro)
        """
        return cls._validate_document(cpf, "CPF", cls.CPF_DIGITS)

    @classmethod
    def sanitize_string(cls, text: str, max_length: Optional[int] = None) -> str:
        """Remove espaços das pontas e trunca em `max_length` (padrão 255)."""
        return text.strip()[:max_length or cls.MAX_STRING_INPUT_LENGTH]
