"""Management of privileged super accounts."""