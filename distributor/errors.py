class DistributorError(Exception):
    """Base class for every error raised by the distributor"""

    pass


class InvalidProofError(DistributorError):
    """Raise if a merkle proof does not recompute the committed root"""

    pass


class MaxClaimsExceededError(DistributorError):
    """Raise if every node in the tree has already made its first claim"""

    pass


class MaxTotalClaimExceededError(DistributorError):
    """Raise if a transfer would push claimed amounts past their cap"""

    pass


class AlreadyClaimedError(DistributorError):
    """Raise if a claim record already exists for the claimant"""

    pass


class NoClaimError(DistributorError):
    """Raise if a claimant withdraws locked tokens before making a first claim"""

    pass


class NothingToClaimError(DistributorError):
    """Raise if no newly vested tokens are available to withdraw"""

    pass


class ClaimExpiredError(DistributorError):
    """Raise if a claim is attempted after the distributor was clawed back"""

    pass


class ClawbackNotReadyError(DistributorError):
    """Raise if clawback is attempted before clawback_start_ts"""

    pass


class AlreadyClawedBackError(DistributorError):
    pass


class UnauthorizedError(DistributorError):
    """Raise if the caller is not the distributor admin"""

    pass


class InvalidTimingError(DistributorError):
    """Raise if start, end and clawback timestamps are out of order"""

    pass


class ArithmeticOverflowError(DistributorError):
    """Raise if an amount leaves the unsigned 64 bit range"""

    pass


class EmptyInputError(DistributorError):
    """Raise if a tree is built from zero recipients"""

    pass


class DuplicateClaimantError(DistributorError):
    """Raise if the same claimant appears twice in a recipient list"""

    pass


class MissingClaimantError(DistributorError):
    """Raise if a claimant is not a node of the merkle tree"""

    pass


class DistributorExistsError(DistributorError):
    pass


class MissingDistributorError(DistributorError):
    pass


class DistributorMismatchError(DistributorError):
    """Raise if a stored distributor does not match the arguments it was created with"""

    pass


class InsufficientFundsError(DistributorError):
    """Raise if a token account holds less than the amount being moved"""

    pass


class UnknownHasherError(DistributorError):
    pass


class BadConfigException(Exception):
    pass


class MissingEnvironmentVariableException(Exception):
    pass


class InvalidAddressError(DistributorError):
    """Raise if a claimant or caller is not a valid 20 byte address"""

    pass
